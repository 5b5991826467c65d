"""
Verbose output for the commands pkgtag runs.

A :class:`VerboseReporter` is created once per CLI invocation. It writes
to stderr so that stdout stays clean, and frames its output with one
blank line before the first message and one after the last.
"""

from __future__ import annotations

from typing import Callable, Optional

import click


class VerboseReporter:
    """Print executed commands when verbose mode is on.

    Parameters
    ----------
    enabled : bool
        If False, :meth:`emit` does nothing.
    echo : callable, optional
        Output function taking ``(message, err=True)``; defaults to
        :func:`click.echo`.
    """

    def __init__(self, enabled: bool, echo: Optional[Callable[..., None]] = None) -> None:
        self.enabled = enabled
        self._echo = echo or click.echo
        self._header_emitted = False

    @property
    def header_emitted(self) -> bool:
        return self._header_emitted

    def __enter__(self) -> "VerboseReporter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def emit(self, message: str) -> None:
        if not self.enabled:
            return
        if not self._header_emitted:
            self._echo(f"\n{message}", err=True)
            self._header_emitted = True
        else:
            self._echo(message, err=True)

    def close(self) -> None:
        """Write the closing blank line if anything was emitted."""
        if self._header_emitted:
            self._echo("", err=True)
