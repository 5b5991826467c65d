"""
Subprocess helper used to invoke package manager executables.

All external commands other than Git go through :func:`run_command` so
that failures surface as a single :class:`ProcessError` type carrying
the captured output. Callers that need to recognise a particular
failure (for example Corepack refusing to run npm) inspect
``stdout``/``stderr`` on the exception.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Union


logger = logging.getLogger(__name__)
# Attach a null handler so that messages are discarded quietly unless the
# CLI configures logging on the root logger.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


def format_command(command: Sequence[str]) -> str:
    """Return ``command`` as a shell-quoted string for messages."""
    return " ".join(shlex.quote(str(part)) for part in command)


class ProcessError(Exception):
    """Raised when an external command cannot be run or exits non-zero."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: Optional[int],
        stdout: str = "",
        stderr: str = "",
        reason: Optional[str] = None,
    ) -> None:
        self.command: List[str] = list(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        message = f"Command failed: {format_command(self.command)}"
        detail = reason or _last_line(stderr)
        if detail:
            message += f": {detail}"
        super().__init__(message)


def _last_line(text: str) -> str:
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    return lines[-1] if lines else ""


@dataclass(frozen=True)
class CommandResult:
    """Captured output of a successful command."""

    stdout: str
    stderr: str


def run_command(
    executable: str,
    args: Sequence[str] = (),
    *,
    cwd: Optional[Union[str, Path]] = None,
    env: Optional[Mapping[str, str]] = None,
    timeout: Optional[float] = None,
) -> CommandResult:
    """Run ``executable`` with ``args`` and return its captured output.

    Raises
    ------
    ProcessError
        If the executable cannot be started, exits with a non-zero
        status, or does not finish within ``timeout`` seconds.
    """
    full_cmd = [executable, *args]
    logger.debug("Executing command: %s", format_command(full_cmd))
    try:
        result = subprocess.run(
            full_cmd,
            cwd=cwd,
            env=dict(env) if env is not None else None,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        raise ProcessError(
            full_cmd,
            None,
            _as_text(exc.stdout),
            _as_text(exc.stderr),
            reason=f"timed out after {timeout} seconds",
        ) from exc
    except OSError as exc:
        raise ProcessError(full_cmd, None, reason=str(exc)) from exc

    if result.returncode != 0:
        logger.debug(
            "Command exited with %s\nSTDOUT: %s\nSTDERR: %s",
            result.returncode,
            result.stdout,
            result.stderr,
        )
        raise ProcessError(full_cmd, result.returncode, result.stdout, result.stderr)
    return CommandResult(stdout=result.stdout, stderr=result.stderr)


def _as_text(data: Union[str, bytes, None]) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data
