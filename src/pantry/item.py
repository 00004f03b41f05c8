"""The selectable item flowing through the pipeline."""

from __future__ import annotations

from dataclasses import dataclass

from .types import DisplayMode, SourceMode


@dataclass(frozen=True)
class Item:
    """One resolved, display-ready selectable unit.

    Items are never mutated; use ``dataclasses.replace`` to derive a new one.

    Attributes:
        title: Text shown in the list.
        value: What gets emitted on selection (text, path, or dynamic id).
        category: Name of the category that produced the item.
        display: Display mode. Provisional TEXT for dynamic items.
        source: Source mode that produced the item.
        preview: Preview command template (dynamic items only).
    """

    title: str = ""
    value: str = ""
    category: str = ""
    display: DisplayMode = DisplayMode.TEXT
    source: SourceMode = SourceMode.CONFIG
    preview: str | None = None

    @property
    def is_picture(self) -> bool:
        """Check if this item is shown in picture mode."""
        return self.display == DisplayMode.PICTURE

    @classmethod
    def from_entry(
        cls,
        key: str,
        value: str,
        category: str,
        display: DisplayMode,
        source: SourceMode = SourceMode.CONFIG,
    ) -> "Item":
        """Create an item from a static config entry (title=key, value verbatim)."""
        return cls(title=key, value=value, category=category, display=display, source=source)
