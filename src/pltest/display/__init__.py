"""Display formatting for pltest reports."""

from .formatter import ReportFormatter

__all__ = ["ReportFormatter"]
