"""Configurable theme for the picker.

The Theme dataclass holds all configurable visual elements (colors, icons,
layout).
"""

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for the picker.

    All colors use Rich markup format (e.g., "green", "bold cyan", "dim").

    Attributes:
        selected_color: Color for the cursor and the highlighted title.
        dim_color: Color for secondary text (values, hints).
        category_color: Color for category tags.
        error_color: Color for failed previews.
        border_color: Color for panel borders.

        cursor_icon: Character shown next to the highlighted item.
        scroll_up_icon: Character indicating more items above.
        scroll_down_icon: Character indicating more items below.
        image_icon: Prefix for image previews.

        panel_width: Fixed panel width (None = terminal width).
        min_visible_items: Minimum rows to show before scrolling.
        max_visible_items: Maximum rows to show (caps tall terminals).
        panel_padding: Lines reserved for borders/title/footer.
        preview_lines: Maximum lines of preview text.
    """

    # Colors
    selected_color: str = "cyan"
    dim_color: str = "dim"
    category_color: str = "magenta"
    error_color: str = "red"
    border_color: str = "cyan"

    # Icons
    cursor_icon: str = "›"
    scroll_up_icon: str = "↑"
    scroll_down_icon: str = "↓"
    image_icon: str = "▣"

    # Layout
    panel_width: int | None = None
    min_visible_items: int = 5
    max_visible_items: int = 20
    panel_padding: int = 8
    preview_lines: int = 12


# Default theme used when none is specified
DEFAULT_THEME = Theme()
