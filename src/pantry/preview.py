"""Preview content for a single item.

Decides what a front end should show for the highlighted item:
- Dynamic items run their preview command with the item id substituted
  and the output is classified as text or binary.
- Picture items pointing at an existing file are images.
- Everything else previews as its value.
"""

from __future__ import annotations

import logging
import os
import shlex
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .executor import ExecutionError, run_shell
from .item import Item
from .types import SourceMode

logger = logging.getLogger(__name__)

# Placeholder replaced by the shell-quoted item id in preview templates
PLACEHOLDER = "{}"

# Control bytes that still count as text
_TEXT_CONTROL_BYTES = frozenset(b"\t\n\r\f\b\x1b")

# Only the head of the output is scanned when classifying
_SNIFF_LENGTH = 8192


class PreviewKind(str, Enum):
    """Kind of preview content."""

    TEXT = "text"
    IMAGE = "image"
    BINARY = "binary"
    ERROR = "error"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PreviewPayload:
    """What to render for one item.

    Attributes:
        kind: Content type.
        text: Text to show (TEXT and ERROR).
        path: Image file path (IMAGE).
        data: Raw command output (BINARY).
    """

    kind: PreviewKind
    text: str = ""
    path: str | None = None
    data: bytes = b""


def is_binary(data: bytes) -> bool:
    """Check if output looks binary (NUL or non-whitespace control bytes)."""
    for byte in data[:_SNIFF_LENGTH]:
        if byte == 0:
            return True
        if (byte < 0x20 or byte == 0x7F) and byte not in _TEXT_CONTROL_BYTES:
            return True
    return False


def build_preview_command(template: str, value: str) -> str:
    """Substitute the quoted item id into a preview template.

    Templates without a placeholder get the id appended as the last argument.
    """
    quoted = shlex.quote(value)
    if PLACEHOLDER in template:
        return template.replace(PLACEHOLDER, quoted)
    return f"{template} {quoted}"


def render_preview(
    item: Item, *, runner: Callable[[str], bytes] = run_shell
) -> PreviewPayload:
    """Compute the preview payload for one item.

    Command failures are reported as an ERROR payload, never raised.
    """
    if item.source == SourceMode.DYNAMIC and item.preview:
        command = build_preview_command(item.preview, item.value)
        try:
            output = runner(command)
        except ExecutionError as e:
            logger.debug("Preview failed for %s: %s", item.value, e)
            return PreviewPayload(kind=PreviewKind.ERROR, text=str(e))
        if is_binary(output):
            return PreviewPayload(kind=PreviewKind.BINARY, data=output)
        return PreviewPayload(kind=PreviewKind.TEXT, text=output.decode("utf-8", errors="replace"))

    if item.is_picture:
        path = os.path.expanduser(item.value)
        if os.path.isfile(path):
            return PreviewPayload(kind=PreviewKind.IMAGE, path=path)

    return PreviewPayload(kind=PreviewKind.TEXT, text=item.value)
