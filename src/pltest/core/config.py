"""Configuration management for pltest.

Settings are resolved from, lowest to highest precedence:
    1. Defaults on HarnessConfig
    2. A YAML config file (optional)
    3. PLTEST_* environment variables (a .env file is loaded first)
    4. Explicit overrides, usually from command-line options
"""

import codecs
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

from .errors import ConfigError
from .logging import get_logger

logger = get_logger(__name__)

ENV_PREFIX = "PLTEST_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


class HarnessConfig(BaseModel):
    """Runtime settings for one harness run."""

    scratch_dir: Path | None = None  # None -> fresh temporary directory
    keep_scratch: bool = False
    timeout: float | None = None  # seconds; None waits forever
    encoding: str = "utf-8"
    escape_output: bool = True
    log_level: str = "WARNING"

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError(f"Timeout must be positive (got {v})")
        return v

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding '{v}'") from None
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}', expected one of {', '.join(_LOG_LEVELS)}"
            )
        return level


def load_yaml(path: Path) -> dict[str, Any]:
    """Load and parse a YAML config file.

    Args:
        path: Path to YAML file

    Returns:
        Parsed YAML as dictionary (empty file -> empty dict)

    Raises:
        ConfigError: If file cannot be read or YAML is invalid
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            f"Invalid YAML in {path}: expected dictionary, got {type(data).__name__}"
        )
    return data


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid value for {name}: '{raw}' (expected true/false)")


def env_overrides(environ: Optional[dict[str, str]] = None) -> dict[str, Any]:
    """Collect settings from PLTEST_* environment variables.

    Args:
        environ: Mapping to read from (default: os.environ)

    Returns:
        Dictionary of HarnessConfig fields that were set

    Raises:
        ConfigError: If a boolean or numeric variable cannot be parsed
    """
    environ = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}

    for field in HarnessConfig.model_fields:
        name = ENV_PREFIX + field.upper()
        raw = environ.get(name)
        if raw is None or raw == "":
            continue

        if field in ("keep_scratch", "escape_output"):
            overrides[field] = _parse_bool(name, raw)
        elif field == "timeout":
            try:
                overrides[field] = float(raw)
            except ValueError:
                raise ConfigError(f"Invalid value for {name}: '{raw}'") from None
        else:
            overrides[field] = raw

    return overrides


def load_config(
    config_path: Optional[Path] = None,
    overrides: Optional[dict[str, Any]] = None,
    use_env: bool = True,
) -> HarnessConfig:
    """Build the effective configuration for a run.

    Args:
        config_path: Optional YAML file with HarnessConfig fields
        overrides: Highest-precedence values; None entries are ignored
        use_env: Whether to read .env and PLTEST_* variables

    Returns:
        Validated HarnessConfig

    Raises:
        ConfigError: If the file is unreadable or any value is invalid

    Example:
        >>> config = load_config(Path("pltest.yaml"), {"timeout": 5.0})
        >>> config.timeout
        5.0
    """
    data: dict[str, Any] = {}

    if config_path is not None:
        logger.debug(f"Loading configuration from {config_path}")
        data.update(load_yaml(config_path))

    if use_env:
        load_dotenv(override=False)  # Don't override existing env vars
        data.update(env_overrides())

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    unknown = sorted(set(data) - set(HarnessConfig.model_fields))
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    try:
        return HarnessConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
