"""Rich.Live-based terminal picker for resolved items.

Example:
    from pantry.picker import Picker

    chosen = Picker(items, title="bookmarks").show()
    if chosen is not None:
        print(chosen.value, end="")
"""

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
from .menu import Picker
from .themes import DEFAULT_THEME, Theme

__all__ = [
    "Picker",
    # Theming
    "Theme",
    "DEFAULT_THEME",
    # Key helpers
    "is_backspace",
    "is_enter",
    "is_escape",
    "is_exit",
    "is_up",
    "is_down",
    "is_page_up",
    "is_page_down",
    "is_home",
    "is_end",
    "is_search",
]
