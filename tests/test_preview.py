"""Tests for preview rendering."""

import pytest

from pantry.executor import CommandFailedError
from pantry.item import Item
from pantry.preview import (
    PreviewKind,
    build_preview_command,
    is_binary,
    render_preview,
)
from pantry.types import DisplayMode, SourceMode


def _dynamic(value: str, preview: str | None = "cat {}") -> Item:
    return Item(title=value, value=value, category="notes", source=SourceMode.DYNAMIC, preview=preview)


class TestIsBinary:
    def test_plain_text(self):
        assert not is_binary(b"hello\tworld\r\n")

    def test_ansi_colors_are_text(self):
        assert not is_binary(b"\x1b[31mred\x1b[0m\n")

    def test_null_byte(self):
        assert is_binary(b"abc\x00def")

    def test_other_control_bytes(self):
        assert is_binary(b"\x89PNG\r\n\x1a\n")

    def test_utf8_text(self):
        assert not is_binary("héllo wörld".encode())


class TestBuildPreviewCommand:
    def test_placeholder_substituted_and_quoted(self):
        assert build_preview_command("cat ~/notes/{}.md", "a b") == "cat ~/notes/'a b'.md"

    def test_every_placeholder(self):
        assert build_preview_command("echo {} {}", "x") == "echo x x"

    def test_appended_without_placeholder(self):
        assert build_preview_command("show", "id; rm -rf /") == "show 'id; rm -rf /'"


class TestRenderPreview:
    def test_text_item(self):
        payload = render_preview(Item(title="t", value="some text"))
        assert payload.kind == PreviewKind.TEXT
        assert payload.text == "some text"

    def test_picture_file(self, tmp_path):
        f = tmp_path / "img.png"
        f.write_bytes(b"x")
        payload = render_preview(Item(value=str(f), display=DisplayMode.PICTURE))
        assert payload.kind == PreviewKind.IMAGE
        assert payload.path == str(f)

    def test_picture_missing_file_falls_back_to_text(self, tmp_path):
        payload = render_preview(Item(value=str(tmp_path / "nope.png"), display=DisplayMode.PICTURE))
        assert payload.kind == PreviewKind.TEXT

    def test_dynamic_text_output(self):
        seen = []

        def runner(command):
            seen.append(command)
            return b"note body\n"

        payload = render_preview(_dynamic("n1", "show {}"), runner=runner)
        assert seen == ["show n1"]
        assert payload.kind == PreviewKind.TEXT
        assert payload.text == "note body\n"

    def test_dynamic_binary_output(self):
        payload = render_preview(_dynamic("n1"), runner=lambda c: b"\x89PNG\x00\x00")
        assert payload.kind == PreviewKind.BINARY
        assert payload.data == b"\x89PNG\x00\x00"

    def test_dynamic_failure_is_error_payload(self):
        def runner(command):
            raise CommandFailedError(command, "no such note", 1)

        payload = render_preview(_dynamic("n1"), runner=runner)
        assert payload.kind == PreviewKind.ERROR
        assert "no such note" in payload.text

    def test_dynamic_without_template_previews_value(self):
        payload = render_preview(_dynamic("n1", preview=None))
        assert payload.kind == PreviewKind.TEXT
        assert payload.text == "n1"

    def test_dynamic_real_shell(self):
        payload = render_preview(_dynamic("hello", "printf '%s!' {}"))
        assert payload.text == "hello!"
