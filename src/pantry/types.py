"""Type definitions for pantry.

This module provides the configuration model (enums, dataclasses) shared by
the parser, the resolver and the item pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DisplayMode(str, Enum):
    """How an item's value is presented.

    TEXT: The value is literal displayable text.
    PICTURE: The value is a filesystem path to an image (or a directory of them).
    """

    TEXT = "text"
    PICTURE = "picture"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: str) -> "DisplayMode":
        """Create DisplayMode from its config spelling.

        Args:
            value: "text" or "picture"

        Returns:
            The corresponding DisplayMode enum value.

        Raises:
            ValueError: If value is not recognized.
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Invalid display mode: {value!r}. Must be 'text' or 'picture'.")


class SourceMode(str, Enum):
    """How a category's entries are turned into items.

    CONFIG: Entries are used verbatim as title -> value pairs.
    COMMAND: Each entry value is a shell command; every output line is an item.
    DYNAMIC: Each entry is (list command -> preview template); the list
        command prints tab-separated "id<TAB>title" lines.
    """

    CONFIG = "config"
    COMMAND = "command"
    DYNAMIC = "dynamic"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_string(cls, value: str) -> "SourceMode":
        """Create SourceMode from its config spelling.

        Raises:
            ValueError: If value is not recognized.
        """
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"Invalid source mode: {value!r}. Must be 'config', 'command', or 'dynamic'."
            )


@dataclass(frozen=True)
class Category:
    """A named group of entries sharing a source/display mode.

    Attributes:
        display: Optional display mode override (None = use the global one).
        source: Optional source mode override (None = use the global one).
        entries: Raw key -> value pairs, in file order.
    """

    display: DisplayMode | None = None
    source: SourceMode | None = None
    entries: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Configuration:
    """Parsed pantry configuration."""

    display: DisplayMode = DisplayMode.TEXT
    source: SourceMode = SourceMode.CONFIG
    categories: dict[str, Category] = field(default_factory=dict)

