"""Configuration loading and parsing for pantry.

The on-disk configuration is a map of maps:

    display = "text"          # optional, global display mode
    source = "config"         # optional, global source mode

    [bookmarks]               # any other table is a category
    display = "text"          # optional per-category override
    source = "command"        # optional per-category override
    "Home" = "~/"             # everything else is an entry (string -> string)

TOML is the default format. Files ending in .yaml/.yml are read as YAML with
the same shape.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import yaml

from .types import Category, Configuration, DisplayMode, SourceMode

logger = logging.getLogger(__name__)

# Keys with a fixed meaning at both the root and the category level
DISPLAY_KEY = "display"
SOURCE_KEY = "source"

YAML_SUFFIXES = (".yaml", ".yml")

CONFIG_ENV_VAR = "PANTRY_CONFIG"


class ConfigError(RuntimeError):
    """Base error for configuration loading."""

    def __init__(self, message: str, path: Path | None = None):
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class ConfigReadError(ConfigError):
    """Raised when the configuration file cannot be read."""


class ConfigParseError(ConfigError):
    """Raised when the configuration text is malformed."""


def get_config_dir() -> Path:
    """Get the pantry config directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(xdg_config) / "pantry"


def get_config_path() -> Path:
    """Get the path to the default config file.

    The PANTRY_CONFIG environment variable takes precedence when set.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(os.path.expanduser(override))
    return get_config_dir() / "config.toml"


class _UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects duplicate mapping keys instead of keeping the last.

    Merge keys (`<<: *anchor`) are left to the base loader; only keys written
    out in the mapping itself count as duplicates.
    """

    MERGE_TAG = "tag:yaml.org,2002:merge"

    def construct_mapping(self, node, deep=False):
        seen: set[Any] = set()
        for key_node, _ in node.value:
            if key_node.tag == self.MERGE_TAG:
                continue
            key = self.construct_object(key_node, deep=deep)
            try:
                duplicate = key in seen
            except TypeError:
                # Unhashable key; let the base constructor report it
                continue
            if duplicate:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    f"found duplicate key {key!r}",
                    key_node.start_mark,
                )
            seen.add(key)
        return super().construct_mapping(node, deep=deep)


def _parse_mode(raw: Any, enum_cls: type, where: str):
    if not isinstance(raw, str):
        raise ConfigParseError(f"{where} must be a string, got {type(raw).__name__}")
    try:
        return enum_cls.from_string(raw)
    except ValueError as e:
        raise ConfigParseError(f"{where}: {e}") from e


def _build_category(name: str, data: Any) -> Category:
    """Build a Category from one category table."""
    if not isinstance(data, dict):
        raise ConfigParseError(f"category {name!r} must be a table, got {type(data).__name__}")

    display: DisplayMode | None = None
    source: SourceMode | None = None
    entries: dict[str, str] = {}

    for key, value in data.items():
        if not isinstance(key, str):
            raise ConfigParseError(f"category {name!r}: keys must be strings, got {key!r}")
        if key == DISPLAY_KEY:
            display = _parse_mode(value, DisplayMode, f"{name}.{DISPLAY_KEY}")
        elif key == SOURCE_KEY:
            source = _parse_mode(value, SourceMode, f"{name}.{SOURCE_KEY}")
        else:
            if not isinstance(value, str):
                raise ConfigParseError(
                    f"entry {name}.{key} must be a string, got {type(value).__name__}"
                )
            entries[key] = value

    return Category(display=display, source=source, entries=entries)


def build_configuration(data: Any) -> Configuration:
    """Build the configuration model from decoded TOML/YAML data.

    Raises:
        ConfigParseError: If the data does not have the expected shape.
    """
    if not isinstance(data, dict):
        raise ConfigParseError(f"configuration root must be a table, got {type(data).__name__}")

    display = DisplayMode.TEXT
    source = SourceMode.CONFIG
    categories: dict[str, Category] = {}

    for key, value in data.items():
        if not isinstance(key, str):
            raise ConfigParseError(f"top-level keys must be strings, got {key!r}")
        if key == DISPLAY_KEY:
            display = _parse_mode(value, DisplayMode, DISPLAY_KEY)
        elif key == SOURCE_KEY:
            source = _parse_mode(value, SourceMode, SOURCE_KEY)
        else:
            categories[key] = _build_category(key, value)

    return Configuration(display=display, source=source, categories=categories)


def parse_config(raw: str) -> Configuration:
    """Parse TOML configuration text.

    Raises:
        ConfigParseError: If the text is not valid TOML or has the wrong shape.
    """
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"invalid TOML: {e}") from e
    return build_configuration(data)


def parse_yaml_config(raw: str) -> Configuration:
    """Parse YAML configuration text.

    An empty document is an empty configuration.

    Raises:
        ConfigParseError: If the text is not valid YAML or has the wrong shape.
    """
    try:
        data = yaml.load(raw, Loader=_UniqueKeyLoader)
    except yaml.YAMLError as e:
        raise ConfigParseError(f"invalid YAML: {e}") from e
    if data is None:
        data = {}
    return build_configuration(data)


def load_config(path: Path | str) -> Configuration:
    """Load and parse a configuration file.

    Args:
        path: Config file path. "~" is expanded.

    Raises:
        ConfigReadError: If the file cannot be read.
        ConfigParseError: If the contents are malformed.
    """
    config_path = Path(os.path.expanduser(str(path)))
    try:
        raw = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigReadError(f"cannot read config: {e}", config_path) from e

    try:
        if config_path.suffix.lower() in YAML_SUFFIXES:
            config = parse_yaml_config(raw)
        else:
            config = parse_config(raw)
    except ConfigParseError as e:
        raise ConfigParseError(str(e), config_path) from e

    logger.debug(
        "Loaded %s: %d categories (display=%s, source=%s)",
        config_path,
        len(config.categories),
        config.display,
        config.source,
    )
    return config
