"""Configuration file support.

Settings are read from ``.credits-tracker.toml`` at the workspace root (or
an explicit path). Command-line options take precedence over file values.

Example::

    app_name = "MyApp"
    output = "Resources/acknowledgements.json"
    format = "json"
    packages_dir = "build/SourcePackages"
    allow_missing_history = false

    [aliases]
    kamaal111 = "Kamaal Farah"
"""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from credits_tracker.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".credits-tracker.toml"
FORMATS = ("json", "markdown")


@dataclass
class Settings:
    """Resolved configuration values.

    Attributes:
        app_name: Application name written to the report.
        output: Output file or directory.
        format: Output format name ("json" or "markdown").
        packages_dir: Directory to scan for manifests instead of the workspace.
        allow_missing_history: Produce a report without contributors when
            git history is unavailable.
        aliases: Mapping of author alias to canonical display name.
        source: Config file the values came from, if any.
    """

    app_name: Optional[str] = None
    output: Optional[Path] = None
    format: str = "json"
    packages_dir: Optional[Path] = None
    allow_missing_history: bool = False
    aliases: dict[str, str] = field(default_factory=dict)
    source: Optional[Path] = None


def _expect(path: Path, key: str, value: Any, kind: type) -> Any:
    if not isinstance(value, kind):
        raise ConfigError(
            f"Invalid value for '{key}' in {path}: expected {kind.__name__}",
            path=path,
        )
    return value


def parse_settings(data: dict[str, Any], path: Path) -> Settings:
    """Build Settings from a parsed TOML document.

    Relative paths are resolved against the config file's directory.

    Args:
        data: Parsed TOML table.
        path: Config file path, used for relative paths and messages.

    Returns:
        Settings populated from the document.

    Raises:
        ConfigError: If a value has the wrong type or an unknown format.
    """
    base = path.parent
    settings = Settings(source=path)

    for key in data:
        if key not in {
            "app_name",
            "output",
            "format",
            "packages_dir",
            "allow_missing_history",
            "aliases",
        }:
            logger.warning(f"Ignoring unknown key '{key}' in {path}")

    if "app_name" in data:
        settings.app_name = _expect(path, "app_name", data["app_name"], str)
    if "output" in data:
        settings.output = base / _expect(path, "output", data["output"], str)
    if "packages_dir" in data:
        settings.packages_dir = base / _expect(
            path, "packages_dir", data["packages_dir"], str
        )
    if "allow_missing_history" in data:
        settings.allow_missing_history = _expect(
            path, "allow_missing_history", data["allow_missing_history"], bool
        )
    if "format" in data:
        settings.format = _expect(path, "format", data["format"], str)
        if settings.format not in FORMATS:
            raise ConfigError(
                f"Unknown format '{settings.format}' in {path}. "
                f"Supported formats: {', '.join(FORMATS)}",
                path=path,
            )
    if "aliases" in data:
        aliases = _expect(path, "aliases", data["aliases"], dict)
        for alias, canonical in aliases.items():
            settings.aliases[alias] = _expect(
                path, f"aliases.{alias}", canonical, str
            )

    return settings


def load_settings(workspace: Path, config_path: Optional[Path] = None) -> Settings:
    """Load settings for a workspace.

    Args:
        workspace: Workspace root, searched for ``.credits-tracker.toml``.
        config_path: Explicit config file; must exist when given.

    Returns:
        Settings from the config file, or defaults if there is none.

    Raises:
        ConfigError: If the file is missing (explicit path only), unreadable,
            or invalid.
    """
    if config_path is None:
        config_path = workspace / CONFIG_FILENAME
        if not config_path.is_file():
            return Settings()
    elif not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}", path=config_path)

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {config_path}: {e}", path=config_path) from e
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}: {e}", path=config_path) from e

    logger.debug(f"Loaded settings from {config_path}")
    return parse_settings(data, config_path)


def parse_alias(value: str) -> tuple[str, str]:
    """Parse a ``RAW=CANONICAL`` alias option.

    Raises:
        ConfigError: If the value has no ``=`` or an empty side.
    """
    alias, sep, canonical = value.partition("=")
    if not sep or not alias.strip() or not canonical.strip():
        raise ConfigError(f"Invalid alias '{value}', expected RAW=CANONICAL")
    return alias.strip(), canonical.strip()
