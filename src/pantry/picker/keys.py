"""Keyboard input helpers for the picker.

This module provides helper functions for detecting key presses,
replacing repeated inline conditionals with readable function calls.
"""

from __future__ import annotations

import readchar


def is_enter(key: str) -> bool:
    """Check if key is Enter/Return."""
    return key in (readchar.key.ENTER, "\r", "\n")


def is_escape(key: str) -> bool:
    """Check if key is Escape (handles terminal variations)."""
    return key in (readchar.key.ESC, "\x1b", "\x1b\x1b")


def is_exit(key: str) -> bool:
    """Check if key cancels the picker (q or Escape)."""
    return key == "q" or is_escape(key)


def is_backspace(key: str) -> bool:
    """Check if key is backspace (handles terminal variations)."""
    return key in (readchar.key.BACKSPACE, "\x7f", "\b")


def is_search(key: str) -> bool:
    """Check if key starts a search ("/")."""
    return key == "/"


def is_up(key: str) -> bool:
    """Check if key is up arrow, vim 'k' or Ctrl+P."""
    return key in ("k", readchar.key.UP, readchar.key.CTRL_P)


def is_down(key: str) -> bool:
    """Check if key is down arrow, vim 'j' or Ctrl+N."""
    return key in ("j", readchar.key.DOWN, readchar.key.CTRL_N)


def is_page_up(key: str) -> bool:
    """Check if key is Page Up."""
    return key == readchar.key.PAGE_UP


def is_page_down(key: str) -> bool:
    """Check if key is Page Down."""
    return key == readchar.key.PAGE_DOWN


def is_home(key: str) -> bool:
    """Check if key jumps to the first item (Home or 'g')."""
    return key in (readchar.key.HOME, "g")


def is_end(key: str) -> bool:
    """Check if key jumps to the last item (End or 'G')."""
    return key in (readchar.key.END, "G")
