"""Case-insensitive item search.

An item matches a query when its title or value equals the query, contains
it, or contains its characters in order (a subsequence, e.g. "gthb" matches
"github"). An empty query matches everything.
"""

from __future__ import annotations

from .item import Item


def is_subsequence(pattern: str, text: str) -> bool:
    """Check whether every character of pattern appears in text, in order."""
    remaining = iter(text)
    return all(char in remaining for char in pattern)


def _text_matches(text: str, query: str) -> bool:
    return text == query or query in text or is_subsequence(query, text)


def item_matches(item: Item, query: str) -> bool:
    """Check if an item's title or value matches the query."""
    if not query:
        return True
    query = query.lower()
    return _text_matches(item.title.lower(), query) or _text_matches(item.value.lower(), query)


def filter_items(items: list[Item], query: str) -> list[Item]:
    """Return the items matching the query, in their original order."""
    return [item for item in items if item_matches(item, query)]


def matching_indices(items: list[Item], query: str) -> list[int]:
    """Return the positions of matching items."""
    return [index for index, item in enumerate(items) if item_matches(item, query)]
