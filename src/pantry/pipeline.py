"""Item resolution pipeline.

Turns a Configuration into the flat list of items a front end shows:

1. Pick the categories to load (filter, or all matching the global display mode)
2. Resolve each category's effective display and source modes
3. Dispatch its entries by source mode (config / command / dynamic)
4. Expand picture items (directories become one item per file)
"""

from __future__ import annotations

import logging
from typing import Callable

from .executor import ExecutionError, execute
from .expander import expand_for_display
from .item import Item
from .resolver import resolve_display_mode, resolve_source_mode
from .types import Category, Configuration, DisplayMode, SourceMode

logger = logging.getLogger(__name__)

# Signature of executor.execute; swapped out in tests
Executor = Callable[..., str]

STDIN_CATEGORY = "stdin"


def _select_categories(
    config: Configuration,
    category_filter: str | None,
    display_override: str | None,
) -> list[tuple[str, Category]]:
    """Pick the categories to load, in config order."""
    if category_filter is not None:
        category = config.categories.get(category_filter)
        if category is None:
            logger.warning("Unknown category: %s", category_filter)
            return []
        return [(category_filter, category)]

    if display_override is not None:
        return list(config.categories.items())

    # Without an override only categories matching the global display mode show up
    return [
        (name, category)
        for name, category in config.categories.items()
        if resolve_display_mode(None, category.display, config.display) == config.display
    ]


def fan_out_command_output(
    key: str, output: str, category: str, display: DisplayMode
) -> list[Item]:
    """Turn command output into items, one per non-empty line.

    A single line keeps the entry key as its title; several lines are
    titled "key [1]", "key [2]", ...
    """
    lines = [line.strip() for line in output.split("\n")]
    lines = [line for line in lines if line]
    if len(lines) == 1:
        titles = [key]
    else:
        titles = [f"{key} [{index}]" for index in range(1, len(lines) + 1)]

    return [
        Item(
            title=title,
            value=line,
            category=category,
            display=display,
            source=SourceMode.COMMAND,
        )
        for title, line in zip(titles, lines)
    ]


def parse_dynamic_output(output: str, category: str, preview: str | None = None) -> list[Item]:
    """Parse "id<TAB>title" lines printed by a dynamic list command.

    Lines without a tab use the whole line as both id and title. NUL bytes
    are removed before splitting, so neither field carries them.
    """
    items: list[Item] = []
    for raw_line in output.split("\n"):
        line = raw_line.replace("\0", "").strip()
        if not line:
            continue

        if "\t" in line:
            ident, title = line.split("\t", 1)
            ident, title = ident.strip(), title.strip()
        else:
            ident = title = line

        items.append(
            Item(
                title=title,
                value=ident,
                category=category,
                display=DisplayMode.TEXT,
                source=SourceMode.DYNAMIC,
                preview=preview,
            )
        )
    return items


def _config_items(name: str, category: Category, display: DisplayMode) -> list[Item]:
    return [
        Item.from_entry(key, value, name, display, SourceMode.CONFIG)
        for key, value in category.entries.items()
    ]


def _command_items(
    name: str, category: Category, display: DisplayMode, executor: Executor
) -> list[Item]:
    items: list[Item] = []
    for key, command in category.entries.items():
        try:
            output = executor(command)
        except ExecutionError as e:
            logger.warning("Skipping %s.%s: %s", name, key, e)
            continue
        items.extend(fan_out_command_output(key, output, name, display))
    return items


def _dynamic_items(name: str, category: Category, executor: Executor) -> list[Item]:
    items: list[Item] = []
    for list_command, preview_template in category.entries.items():
        try:
            output = executor(list_command, lossy=True)
        except ExecutionError as e:
            logger.warning("Skipping dynamic list in %s: %s", name, e)
            continue
        items.extend(parse_dynamic_output(output, name, preview_template or None))
    return items


def _category_items(
    name: str,
    category: Category,
    display: DisplayMode,
    source: SourceMode,
    executor: Executor,
) -> list[Item]:
    """Dispatch one category's entries by source mode."""
    match source:
        case SourceMode.CONFIG:
            return _config_items(name, category, display)
        case SourceMode.COMMAND:
            return _command_items(name, category, display, executor)
        case SourceMode.DYNAMIC:
            return _dynamic_items(name, category, executor)
    raise AssertionError(f"unhandled source mode: {source!r}")


def resolve_items(
    config: Configuration,
    category_filter: str | None = None,
    display_override: str | None = None,
    *,
    executor: Executor = execute,
) -> list[Item]:
    """Compute the flat, display-ready item list for a configuration.

    Failing commands only drop their own entry; this never raises for them.

    Args:
        config: Parsed configuration.
        category_filter: Load only this category (empty result if unknown).
        display_override: CLI display mode string ("text"/"picture"). When
            set, every category is loaded regardless of its own mode.
        executor: Command runner with the signature of executor.execute.

    Returns:
        Items in category order, then entry order, then output line order.
    """
    items: list[Item] = []
    for name, category in _select_categories(config, category_filter, display_override):
        display = resolve_display_mode(display_override, category.display, config.display)
        source = resolve_source_mode(category.source, config.source)
        category_items = _category_items(name, category, display, source, executor)
        logger.debug("Category %s (%s/%s): %d items", name, display, source, len(category_items))
        items.extend(category_items)

    return expand_for_display(items)


def items_from_lines(
    text: str, display: DisplayMode = DisplayMode.TEXT, category: str = STDIN_CATEGORY
) -> list[Item]:
    """Build items from raw text, one per non-empty line (title == value).

    Lines end at LF only, with a trailing CR dropped; form feeds and other
    Unicode line breaks stay part of the line.
    """
    lines = (line.removesuffix("\r") for line in text.split("\n"))
    return [
        Item(title=line, value=line, category=category, display=display)
        for line in lines
        if line.strip()
    ]
