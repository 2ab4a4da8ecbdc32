"""Typed configuration loading.

The config file is TOML:

    branches = ["master", "develop"]
    mainline = "master"

    [[files]]
    url = "package.json"
    keys = ["version"]

The loaded Config is immutable and passed explicitly to whatever needs it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_list, get_str, get_str_list

__all__ = [
    "Config",
    "ConfigError",
    "FileTarget",
    "DEFAULT_CONFIG_NAME",
    "DEFAULT_MAINLINE",
    "load_config",
    "load_config_or_default",
]

DEFAULT_CONFIG_NAME = "relver.toml"
DEFAULT_MAINLINE = "master"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class FileTarget:
    """A JSON file whose version keys get rewritten.

    Attributes:
        url: Path relative to the project root.
        keys: Key names as written in the config, or None for the defaults.
            Items are kept untyped so the updater can report bad entries.
    """

    url: str
    keys: tuple[object, ...] | None = None


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    branches: tuple[str, ...] = ()
    mainline: str = DEFAULT_MAINLINE
    files: tuple[FileTarget, ...] = field(default_factory=tuple)

    def allows(self, branch: str) -> bool:
        """True if branch is one of the configured release branches."""
        return branch in self.branches

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        files: list[FileTarget] = []
        for i, raw in enumerate(get_list(data, "files") or []):
            table = as_str_dict(raw)
            if table is None:
                raise TypeError(f"files[{i}] must be a table")
            url = get_str(table, "url")
            if url is None:
                raise ValueError(f"files[{i}] is missing 'url'")
            keys = get_list(table, "keys")
            files.append(FileTarget(url=url, keys=tuple(keys) if keys is not None else None))

        return cls(
            branches=tuple(get_str_list(data, "branches")),
            mainline=get_str(data, "mainline") or DEFAULT_MAINLINE,
            files=tuple(files),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        content = path.read_bytes()
        data = as_str_dict(tomllib.loads(content.decode("utf-8")))
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


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to relver.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Config:
    """Load config from file, or return an empty config if it can't be read."""
    result = load_config(path)
    if isinstance(result, Ok):
        return result.value
    return Config()
