"""Position-tracking cursor over the raw text of a test-definition file."""

# Returned by peek()/advance() once the text is exhausted
END = ""


class Cursor:
    """Character-at-a-time view over a string that counts lines.

    All token extraction goes through ``mark()`` and ``slice_from()``: remember
    a position, advance, then take the text between the two.
    """

    def __init__(self, text: str, line: int = 1):
        self.text = text
        self.pos = 0
        self.line = line

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos}, line={self.line}, remaining={len(self.text) - self.pos})"

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        """Current character without consuming it, or END."""
        if self.at_end():
            return END
        return self.text[self.pos]

    def advance(self) -> str:
        """Consume and return the current character, or END."""
        if self.at_end():
            return END
        char = self.text[self.pos]
        self.pos += 1
        if char == "\n":
            self.line += 1
        return char

    def skip(self, count: int) -> None:
        for _ in range(count):
            if self.advance() == END:
                break

    def startswith(self, token: str) -> bool:
        """Whether the unconsumed text begins with token."""
        return self.text.startswith(token, self.pos)

    def mark(self) -> int:
        return self.pos

    def slice_from(self, start: int) -> str:
        """Text between a remembered position and the current one.

        The caller guarantees start came from mark() on this cursor and is not
        past the current position.
        """
        return self.text[start : self.pos]

    @property
    def remaining(self) -> str:
        return self.text[self.pos :]
