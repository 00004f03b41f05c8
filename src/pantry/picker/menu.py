"""Interactive item picker using Rich.Live.

Shows the resolved items as a scrolling list with an optional preview pane
for the highlighted item. The picker only navigates and selects; emitting
the selection is up to the caller.

Example:
    from pantry.picker import Picker

    picker = Picker(items, title="pantry")
    chosen = picker.show()  # Item, or None if cancelled
"""

from __future__ import annotations

import os
from typing import Callable

import readchar
from rich.console import Console, Group
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel

from ..item import Item
from ..preview import PreviewKind, PreviewPayload, render_preview
from ..search import matching_indices
from .keys import (
    is_backspace,
    is_down,
    is_end,
    is_enter,
    is_escape,
    is_exit,
    is_home,
    is_page_down,
    is_page_up,
    is_search,
    is_up,
)
from .themes import DEFAULT_THEME, Theme


class Picker:
    """Keyboard-driven list of items with live updates.

    Keyboard controls:
        - Up/Down, j/k or Ctrl+P/Ctrl+N: Move
        - PgUp/PgDn, Home/End (g/G): Jump
        - /: Search (type to filter, Backspace to erase, Esc to clear)
        - Enter: Select the highlighted item
        - q/Esc: Cancel

    Args:
        items: Items to choose from.
        title: Panel title.
        console: Rich Console to draw on (callers pass a stderr console so
            stdout stays free for the selection).
        theme: Visual theme.
        show_preview: Whether to draw the preview pane.
        renderer: Preview function, item -> PreviewPayload.

    Raises:
        ValueError: If items is empty.
    """

    def __init__(
        self,
        items: list[Item],
        title: str = "pantry",
        console: Console | None = None,
        theme: Theme | None = None,
        show_preview: bool = False,
        renderer: Callable[[Item], PreviewPayload] = render_preview,
    ):
        if not items:
            raise ValueError("Picker must have at least one item")

        self.items = items
        self.title = title
        self.console = console or Console(stderr=True)
        self.theme = theme or DEFAULT_THEME
        self.show_preview = show_preview
        self.renderer = renderer
        self.query = ""
        self.searching = False
        # Indices into items that match the query; cursor_pos indexes this list
        self.matches: list[int] = list(range(len(items)))
        self.cursor_pos = 0
        self.window_offset = 0
        self.selected: Item | None = None
        self.interrupted = False
        self.should_exit = False
        # Preview payloads by item index; dynamic previews run a command
        self._preview_cache: dict[int, PreviewPayload] = {}

    @property
    def current(self) -> Item | None:
        """The highlighted item, or None when nothing matches the query."""
        if not self.matches:
            return None
        return self.items[self.matches[self.cursor_pos]]

    def _max_visible(self) -> int:
        calculated = self.console.height - self.theme.panel_padding
        if self.show_preview:
            calculated -= self.theme.preview_lines + 2
        return max(self.theme.min_visible_items, min(self.theme.max_visible_items, calculated))

    def _move_cursor(self, delta: int, wrap: bool = True):
        """Move cursor up/down, wrapping around for single steps."""
        if not self.matches:
            return
        new_pos = self.cursor_pos + delta
        if wrap:
            new_pos %= len(self.matches)
        else:
            new_pos = max(0, min(len(self.matches) - 1, new_pos))
        self.cursor_pos = new_pos

    def _update_window(self, max_visible: int):
        """Update window offset to keep cursor visible."""
        if len(self.matches) <= max_visible:
            self.window_offset = 0
            return

        if self.cursor_pos < self.window_offset:
            self.window_offset = self.cursor_pos
        elif self.cursor_pos >= self.window_offset + max_visible:
            self.window_offset = self.cursor_pos - max_visible + 1

    def set_query(self, query: str):
        """Filter the list, keeping the highlighted item when it still matches."""
        highlighted = self.matches[self.cursor_pos] if self.matches else None
        self.query = query
        self.matches = matching_indices(self.items, query)
        if highlighted in self.matches:
            self.cursor_pos = self.matches.index(highlighted)
        else:
            self.cursor_pos = 0
        self.window_offset = 0

    def _select_current(self):
        if self.current is not None:
            self.selected = self.current
            self.should_exit = True

    def _handle_navigation(self, key: str) -> bool:
        page = self._max_visible()
        if is_down(key):
            self._move_cursor(+1)
        elif is_up(key):
            self._move_cursor(-1)
        elif is_page_down(key):
            self._move_cursor(+page, wrap=False)
        elif is_page_up(key):
            self._move_cursor(-page, wrap=False)
        elif is_home(key):
            self.cursor_pos = 0
        elif is_end(key):
            self.cursor_pos = max(len(self.matches) - 1, 0)
        else:
            return False
        return True

    def _handle_search_key(self, key: str):
        """Edit the query; printable keys are text, not commands."""
        if is_enter(key):
            self._select_current()
        elif is_escape(key):
            self.searching = False
            self.set_query("")
        elif is_backspace(key):
            if self.query:
                self.set_query(self.query[:-1])
        elif len(key) == 1 and key.isprintable():
            self.set_query(self.query + key)
        else:
            self._handle_navigation(key)

    def _handle_key(self, key: str):
        """Handle keyboard input and update picker state."""
        if self.searching:
            self._handle_search_key(key)
        elif is_enter(key):
            self._select_current()
        elif is_search(key):
            self.searching = True
        elif is_exit(key):
            self.should_exit = True
        else:
            self._handle_navigation(key)

    def _render_row(self, item: Item, is_selected: bool) -> str:
        theme = self.theme
        title = escape(item.title)
        category = f"[{theme.category_color}]{escape(item.category)}[/{theme.category_color}]"
        if is_selected:
            prefix = f"[{theme.selected_color}]{theme.cursor_icon}[/{theme.selected_color}]"
            title = f"[bold {theme.selected_color}]{title}[/bold {theme.selected_color}]"
        else:
            prefix = " "
        return f"{prefix} {title}  {category}"

    def _preview(self) -> PreviewPayload:
        index = self.matches[self.cursor_pos]
        if index not in self._preview_cache:
            self._preview_cache[index] = self.renderer(self.items[index])
        return self._preview_cache[index]

    def _render_preview(self) -> Panel:
        theme = self.theme
        current = self.current
        if current is None:
            return Panel(
                "",
                border_style=theme.dim_color,
                width=theme.panel_width,
                height=theme.preview_lines + 2,
            )

        payload = self._preview()
        if payload.kind == PreviewKind.IMAGE:
            try:
                size = f"{os.path.getsize(payload.path):,} bytes"
            except OSError:
                size = "unknown size"
            body = f"{theme.image_icon} {escape(payload.path)}\n[{theme.dim_color}]{size}[/{theme.dim_color}]"
        elif payload.kind == PreviewKind.BINARY:
            body = f"[{theme.dim_color}]<binary output, {len(payload.data):,} bytes>[/{theme.dim_color}]"
        elif payload.kind == PreviewKind.ERROR:
            body = f"[{theme.error_color}]{escape(payload.text)}[/{theme.error_color}]"
        else:
            lines = payload.text.splitlines()[: theme.preview_lines]
            body = escape("\n".join(lines))

        return Panel(
            body,
            title=escape(current.title),
            title_align="left",
            border_style=theme.dim_color,
            width=theme.panel_width,
            height=theme.preview_lines + 2,
        )

    def _render_footer(self) -> str:
        dim = self.theme.dim_color
        if self.searching:
            hints = "type to filter • ↑↓ navigate • Enter select • Esc clear"
        else:
            hints = (
                f"{self.theme.scroll_up_icon}{self.theme.scroll_down_icon}/jk navigate "
                "• / search • Enter select • q/Esc cancel"
            )
        position = f"{self.cursor_pos + 1}/{len(self.matches)}" if self.matches else "0/0"
        if self.query:
            position += f" of {len(self.items)}"
        return f"[{dim}]{hints} • {position}[/{dim}]"

    def render(self) -> Group:
        """Render the list (and preview pane) as Rich renderables."""
        theme = self.theme
        max_visible = self._max_visible()
        self._update_window(max_visible)

        window_end = min(self.window_offset + max_visible, len(self.matches))
        visible = self.matches[self.window_offset : window_end]

        lines = []
        if self.searching or self.query:
            lines.append(f"[bold]Search:[/bold] {escape(self.query)}")
        if self.window_offset > 0:
            lines.append(
                f"[{theme.dim_color}]  {theme.scroll_up_icon} "
                f"{self.window_offset} more above[/{theme.dim_color}]"
            )

        for i, index in enumerate(visible):
            lines.append(self._render_row(self.items[index], self.window_offset + i == self.cursor_pos))

        if not self.matches:
            lines.append(f"[{theme.dim_color}]  No matches[/{theme.dim_color}]")

        items_below = len(self.matches) - window_end
        if items_below > 0:
            lines.append(
                f"[{theme.dim_color}]  {theme.scroll_down_icon} "
                f"{items_below} more below[/{theme.dim_color}]"
            )

        content = "\n".join(lines)
        list_panel = Panel(
            f"{content}\n\n{self._render_footer()}",
            title=f"[bold]{escape(self.title)}[/bold]",
            border_style=theme.border_color,
            width=theme.panel_width,
        )
        if not self.show_preview:
            return Group(list_panel)
        return Group(list_panel, self._render_preview())

    def show(self) -> Item | None:
        """Display the picker and block until the user selects or cancels.

        Returns:
            The selected Item, or None when cancelled. ``interrupted`` is set
            when the user pressed Ctrl+C.
        """
        with Live(
            self.render(), console=self.console, refresh_per_second=20, transient=True
        ) as live:
            while not self.should_exit:
                try:
                    key = readchar.readkey()
                except KeyboardInterrupt:
                    self.interrupted = True
                    break
                self._handle_key(key)
                live.update(self.render())

        return self.selected
