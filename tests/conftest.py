"""Pytest fixtures for pantry tests."""

import io
import textwrap

import pytest

from pantry.executor import CommandFailedError


@pytest.fixture
def write_config(tmp_path):
    """Write a config file and return its path."""

    def _write(content: str, name: str = "config.toml"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(content))
        return path

    return _write


@pytest.fixture
def fake_executor():
    """Factory for an executor that answers from a command -> output table.

    Commands missing from the table fail like a non-zero exit. Every call is
    recorded in ``calls`` as (command, kwargs).
    """

    def _make(outputs: dict[str, str]):
        def _execute(command: str, **kwargs) -> str:
            _execute.calls.append((command, kwargs))
            if command not in outputs:
                raise CommandFailedError(command, "not found", 127)
            return outputs[command]

        _execute.calls = []
        return _execute

    return _make


@pytest.fixture
def picture_tree(tmp_path):
    """Create a small directory of images.

    Layout:
        pics/a.png
        pics/b.jpg
        pics/nested/c.gif
        pics/nested/deeper/d.png
    """
    root = tmp_path / "pics"
    (root / "nested" / "deeper").mkdir(parents=True)
    for rel in ["a.png", "b.jpg", "nested/c.gif", "nested/deeper/d.png"]:
        (root / rel).write_bytes(b"\x89PNG fake")
    return root


class _Stdin(io.StringIO):
    """StringIO that can pretend to be a terminal."""

    def __init__(self, data: str = "", tty: bool = False):
        super().__init__(data)
        self._tty = tty

    def isatty(self) -> bool:
        return self._tty


@pytest.fixture
def tty_stdin():
    """Stdin stand-in for an interactive terminal (config mode)."""
    return _Stdin(tty=True)


@pytest.fixture
def piped_stdin():
    """Factory for piped stdin carrying the given text (stdin mode)."""

    def _make(data: str):
        return _Stdin(data, tty=False)

    return _make


@pytest.fixture
def cli_runner():
    """Helper to run CLI commands and capture output."""
    from contextlib import redirect_stderr, redirect_stdout

    class CLIRunner:
        def __init__(self):
            self.stdout = ""
            self.stderr = ""
            self.exit_code = 0

        def run(self, func, *args):
            """Run a CLI function with captured output."""
            stdout_buffer = io.StringIO()
            stderr_buffer = io.StringIO()

            try:
                with redirect_stdout(stdout_buffer), redirect_stderr(stderr_buffer):
                    func(*args)
                self.exit_code = 0
            except SystemExit as e:
                self.exit_code = e.code if e.code is not None else 0

            self.stdout = stdout_buffer.getvalue()
            self.stderr = stderr_buffer.getvalue()
            return self

    return CLIRunner()
