"""Resolve effective display and source modes.

Display resolution order: CLI override > category setting > global setting.
Source resolution order: category setting > global setting.
"""

from __future__ import annotations

from .types import Configuration, DisplayMode, SourceMode

# CLI spellings accepted for --display. Matched case-sensitively.
_CLI_DISPLAY_MODES: dict[str, DisplayMode] = {
    "picture": DisplayMode.PICTURE,
    "text": DisplayMode.TEXT,
}


def resolve_display_mode(
    cli_override: str | None,
    category_display: DisplayMode | None,
    global_display: DisplayMode,
) -> DisplayMode:
    """Compute the effective display mode.

    An unrecognized ``cli_override`` is not an error; it falls through to the
    category setting.
    """
    if cli_override is not None and cli_override in _CLI_DISPLAY_MODES:
        return _CLI_DISPLAY_MODES[cli_override]
    if category_display is not None:
        return category_display
    return global_display


def resolve_source_mode(
    category_source: SourceMode | None, global_source: SourceMode
) -> SourceMode:
    """Compute the effective source mode (no CLI channel exists for it)."""
    if category_source is not None:
        return category_source
    return global_source


def get_config_display_mode(
    config: Configuration,
    category_filter: str | None = None,
    cli_override: str | None = None,
) -> DisplayMode:
    """Get the display mode a front end should lay itself out for.

    Resolved against the filtered category when it exists, otherwise against
    the global setting alone.
    """
    if category_filter is not None and category_filter in config.categories:
        category = config.categories[category_filter]
        return resolve_display_mode(cli_override, category.display, config.display)
    return resolve_display_mode(cli_override, None, config.display)
