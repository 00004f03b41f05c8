"""Run shell commands for command and dynamic sources."""

from __future__ import annotations

import logging
import subprocess

logger = logging.getLogger(__name__)


class ExecutionError(RuntimeError):
    """Base error for external command execution."""

    def __init__(self, command: str, message: str):
        self.command = command
        super().__init__(message)


class CommandUnavailableError(ExecutionError):
    """Raised when the shell could not be spawned at all."""

    def __init__(self, command: str, reason: str = ""):
        self.reason = reason
        super().__init__(command, f"Cannot run command {command!r}: {reason or 'unavailable'}")


class CommandFailedError(ExecutionError):
    """Raised when the command exits non-zero (or times out)."""

    def __init__(self, command: str, stderr: str, returncode: int | None = None):
        self.stderr = stderr
        self.returncode = returncode
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(command, f"Command failed: {command!r}: {detail}")


class InvalidOutputError(ExecutionError):
    """Raised when command output is not valid UTF-8."""

    def __init__(self, command: str, error: UnicodeDecodeError):
        self.error = error
        super().__init__(command, f"Command produced invalid UTF-8: {command!r}: {error}")


def run_shell(command: str, timeout: float | None = None) -> bytes:
    """Run ``sh -c command`` and return raw stdout bytes.

    Raises:
        CommandUnavailableError: If the shell cannot be spawned.
        CommandFailedError: On non-zero exit status or timeout.
    """
    try:
        result = subprocess.run(
            ["sh", "-c", command],
            capture_output=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        raise CommandFailedError(command, f"timed out after {timeout}s")
    except OSError as e:
        raise CommandUnavailableError(command, str(e)) from e

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace")
        raise CommandFailedError(command, stderr, result.returncode)
    return result.stdout


def execute(command: str, *, lossy: bool = False, timeout: float | None = None) -> str:
    """Execute a shell command and return its stdout as text.

    Args:
        command: Shell command line, passed to ``sh -c``.
        lossy: Replace undecodable bytes instead of failing.
        timeout: Seconds before the command is killed. None waits forever.

    Returns:
        Captured stdout.

    Raises:
        ExecutionError: CommandUnavailableError, CommandFailedError or
            InvalidOutputError.
    """
    logger.debug("Running: %s", command)
    stdout = run_shell(command, timeout=timeout)
    if lossy:
        return stdout.decode("utf-8", errors="replace")
    try:
        return stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidOutputError(command, e) from e
