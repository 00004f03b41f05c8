"""CLI interface for pantry.

pantry reads items either from standard input (one per line, when stdin is
not a terminal) or from the configuration file, lets the user pick one, and
writes the chosen value to stdout without a trailing newline.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import ConfigError, get_config_path, load_config
from .expander import expand_for_display
from .item import Item
from .pipeline import items_from_lines, resolve_items
from .resolver import get_config_display_mode, resolve_display_mode
from .types import DisplayMode, SourceMode

logger = logging.getLogger(__name__)

_stderr = Console(stderr=True, highlight=False)


def _error(msg: str) -> None:
    """Print a diagnostic to stderr with Rich markup support."""
    _stderr.print(msg)


def configure_logging(verbose: bool = False) -> None:
    """Set up root logging on stderr. WARNING by default, DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname).1s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def emit_selection(item: Item, stream: TextIO | None = None) -> None:
    """Write the chosen value verbatim, with no trailing newline."""
    stream = stream or sys.stdout
    stream.write(item.value)
    stream.flush()


def print_items(items: list[Item], console: Console | None = None) -> None:
    """Print items as a table (used by --list)."""
    console = console or Console(highlight=False)
    table = Table(show_header=True, header_style="bold")
    table.add_column("Title")
    table.add_column("Value", overflow="fold")
    table.add_column("Category", style="magenta")
    table.add_column("Display")
    table.add_column("Source")
    for item in items:
        table.add_row(
            escape(item.title),
            escape(item.value),
            escape(item.category),
            str(item.display),
            str(item.source),
        )
    console.print(table)


def load_stdin_items(stream: TextIO, display_arg: str | None) -> tuple[list[Item], DisplayMode]:
    """Build items from piped input. Only the CLI flag can pick the display mode."""
    display = resolve_display_mode(display_arg, None, DisplayMode.TEXT)
    items = expand_for_display(items_from_lines(stream.read(), display))
    return items, display


def load_config_items(args) -> tuple[list[Item], DisplayMode]:
    """Resolve items from the configuration file.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    config_path = args.config or get_config_path()
    config = load_config(config_path)
    items = resolve_items(config, args.category, args.display)
    return items, get_config_display_mode(config, args.category, args.display)


def _reattach_tty() -> bool:
    """Point stdin at the controlling terminal after consuming piped input."""
    try:
        tty = open("/dev/tty", encoding="utf-8")
    except OSError as e:
        logger.debug("No controlling terminal: %s", e)
        return False
    previous, sys.stdin = sys.stdin, tty
    if previous is not None:
        previous.close()
    return True


def pick(items: list[Item], layout: DisplayMode, title: str) -> None:
    """Run the interactive picker and emit the selection.

    Exits 1 when cancelled and 130 on Ctrl+C.
    """
    from .picker import Picker

    show_preview = layout == DisplayMode.PICTURE or any(
        item.source == SourceMode.DYNAMIC for item in items
    )
    picker = Picker(items, title=title, console=_stderr, show_preview=show_preview)
    chosen = picker.show()

    if picker.interrupted:
        sys.exit(130)
    if chosen is None:
        sys.exit(1)
    emit_selection(chosen)


def run(args, stdin: TextIO | None = None) -> None:
    """Resolve items for the parsed arguments, then list or pick."""
    if stdin is None:
        stdin = sys.stdin
    # A closed stdin (launched with <&-) means config mode
    from_stdin = stdin is not None and not stdin.isatty()

    if from_stdin:
        items, layout = load_stdin_items(stdin, args.display)
    else:
        try:
            items, layout = load_config_items(args)
        except ConfigError as e:
            _error(f"[red]Error:[/red] {escape(str(e))}")
            sys.exit(1)

    logger.debug("Resolved %d items (layout: %s)", len(items), layout)

    if args.list_only:
        print_items(items)
        return

    if not items:
        _error("No items to show.")
        sys.exit(1)

    if from_stdin and not _reattach_tty():
        _error("[red]Error:[/red] no terminal available for interactive selection (try --list)")
        sys.exit(1)

    pick(items, layout, title=args.category or "pantry")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pantry",
        description="A generic selector for various types of entries",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-f", "--config",
        help=f"Configuration file path (default: {get_config_path()})",
    )
    parser.add_argument(
        "-c", "--category",
        help="Load only this category (default: all categories matching the global display mode)",
    )
    parser.add_argument(
        "-d", "--display",
        help="Display mode: text or picture (overrides the config; loads every category)",
    )
    parser.add_argument(
        "-l", "--list", dest="list_only", action="store_true",
        help="Print the resolved items instead of picking one",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        run(args)
    except KeyboardInterrupt:
        _error("")
        sys.exit(130)
