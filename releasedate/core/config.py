"""Typed configuration loading and access.

Configuration lives in a TOML file under a ``[release_date]`` table:

    [release_date]
    parse_pattern = "%Y-%m-%d"
    format_pattern = "%B %d, %Y"
    comment_text = "released on: {}"
    accept_if_not_exists = false
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result, is_ok
from .structured import StrDict, WrongType, as_str_dict, get_bool, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "ReleaseDateConfig",
    "load_config",
    "load_config_or_default",
    "DEFAULT_PARSE_PATTERN",
    "DEFAULT_FORMAT_PATTERN",
    "DEFAULT_COMMENT_TEXT",
]

# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------

DEFAULT_PARSE_PATTERN = "%Y-%m-%d"
DEFAULT_FORMAT_PATTERN = "%B %d, %Y"
# "{}" is replaced with the formatted release date
DEFAULT_COMMENT_TEXT = "released on: {}"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseDateConfig:
    """Annotation patterns and filter policy."""

    parse_pattern: str = DEFAULT_PARSE_PATTERN
    format_pattern: str = DEFAULT_FORMAT_PATTERN
    comment_text: str = DEFAULT_COMMENT_TEXT
    accept_if_not_exists: bool = False


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    release_date: ReleaseDateConfig = field(default_factory=ReleaseDateConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            WrongType: A known key holds a value of the wrong type.
        """
        table: StrDict = get_table(data, "release_date") or {}
        accept = get_bool(table, "accept_if_not_exists")

        return cls(
            release_date=ReleaseDateConfig(
                parse_pattern=get_str(table, "parse_pattern") or DEFAULT_PARSE_PATTERN,
                format_pattern=get_str(table, "format_pattern") or DEFAULT_FORMAT_PATTERN,
                comment_text=get_str(table, "comment_text") or DEFAULT_COMMENT_TEXT,
                accept_if_not_exists=accept if accept is not None else False,
            )
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    except OSError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to the TOML file

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except WrongType as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Config:
    """Load config from file, or return the default config on any failure."""
    result = load_config(path)
    if is_ok(result):
        return result.value
    return Config()
