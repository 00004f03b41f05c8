"""pantry - pick an entry from configured categories and print its value."""

__version__ = "0.3.0"

from .config import (
    ConfigError,
    ConfigParseError,
    ConfigReadError,
    load_config,
    parse_config,
    parse_yaml_config,
)
from .executor import (
    CommandFailedError,
    CommandUnavailableError,
    ExecutionError,
    InvalidOutputError,
    execute,
)
from .expander import expand_for_display, expand_item
from .item import Item
from .pipeline import resolve_items
from .preview import PreviewKind, PreviewPayload, render_preview
from .resolver import resolve_display_mode, resolve_source_mode
from .search import filter_items, item_matches
from .types import Category, Configuration, DisplayMode, SourceMode

__all__ = [
    "__version__",
    # Model
    "Category",
    "Configuration",
    "DisplayMode",
    "SourceMode",
    "Item",
    # Config
    "ConfigError",
    "ConfigParseError",
    "ConfigReadError",
    "load_config",
    "parse_config",
    "parse_yaml_config",
    # Resolution
    "resolve_display_mode",
    "resolve_source_mode",
    "resolve_items",
    "expand_for_display",
    "expand_item",
    # Commands
    "execute",
    "ExecutionError",
    "CommandFailedError",
    "CommandUnavailableError",
    "InvalidOutputError",
    # Preview
    "render_preview",
    "PreviewKind",
    "PreviewPayload",
    # Search
    "filter_items",
    "item_matches",
]
