"""Expand picture-mode items for display.

A picture item whose value names a directory becomes one item per regular
file below it. Any other picture item gets its value tilde-expanded.
Non-picture items pass through untouched.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from typing import Iterator

from .item import Item

logger = logging.getLogger(__name__)


def walk_files(root: str) -> Iterator[str]:
    """Yield every regular file below ``root``, following symlinks.

    Entries are visited in sorted name order. Unreadable directories, broken
    links and links looping back to an ancestor are skipped.
    """
    yield from _walk(root, frozenset())


def _walk(directory: str, ancestors: frozenset[str]) -> Iterator[str]:
    real = os.path.realpath(directory)
    if real in ancestors:
        logger.debug("Skipping symlink loop: %s", directory)
        return
    ancestors = ancestors | {real}

    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        logger.debug("Skipping unreadable directory %s: %s", directory, e)
        return

    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=True):
                yield from _walk(entry.path, ancestors)
            elif entry.is_file(follow_symlinks=True):
                yield entry.path
        except OSError as e:
            logger.debug("Skipping %s: %s", entry.path, e)


def expand_item(item: Item) -> list[Item]:
    """Expand a single item for display."""
    if not item.is_picture:
        return [item]

    path = os.path.expanduser(item.value)
    if not os.path.isdir(path):
        return [replace(item, value=path)]

    return [
        replace(item, title=f"{os.path.basename(file_path)} ({item.title})", value=file_path)
        for file_path in walk_files(path)
    ]


def expand_for_display(items: list[Item], max_workers: int | None = None) -> list[Item]:
    """Expand every item, in parallel, keeping the input order of items."""
    if not any(item.is_picture for item in items):
        return list(items)

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        expanded = pool.map(expand_item, items)
        return [result for group in expanded for result in group]
