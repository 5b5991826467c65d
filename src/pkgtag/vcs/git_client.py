"""
Git client implementation for pkgtag.

This module wraps the handful of Git operations the tagger needs:
checking for a tag, creating it and pushing it. All subprocess calls
go through :meth:`GitClient._run` so that unit tests can mock them
easily.
"""

from __future__ import annotations

import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from pkgtag.reporter import VerboseReporter
from pkgtag.runner import format_command


logger = logging.getLogger(__name__)
# Attach a null handler to avoid logging errors when the root logger is not
# configured. Logs will propagate to the root when configured by the CLI.
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


_LINE_SPLIT_RE = re.compile(r"[\r\n]+")


class GitError(Exception):
    """Raised when a Git command fails."""

    pass


@dataclass(frozen=True)
class GitCommand:
    """A Git invocation that can be displayed before it is run."""

    args: List[str]

    @property
    def argv(self) -> List[str]:
        return ["git"] + self.args

    @property
    def text(self) -> str:
        return format_command(self.argv)


class GitClient:
    """Client for interacting with a Git repository."""

    def __init__(self, repo_root: Path) -> None:
        self.repo_root = repo_root

    @staticmethod
    def build_tag_command(
        tag_name: str, message: Optional[str] = None, sign: bool = False
    ) -> GitCommand:
        """Return the ``git tag`` command for ``tag_name``.

        A message or signing turns the tag into an annotated one, the
        same way ``npm version`` creates it.
        """
        if sign or message is not None:
            return GitCommand(["tag", tag_name, "-sm" if sign else "-m", message or ""])
        return GitCommand(["tag", tag_name])

    # ------------------------------------------------------------------
    # Basic Git commands
    # ------------------------------------------------------------------
    def _run(self, args: List[str], check: bool = True) -> subprocess.CompletedProcess:
        """Run a Git command in the repository root.

        Raises
        ------
        GitError
            If the command exits with a non-zero status when ``check`` is
            True, or if ``git`` cannot be started.
        """
        full_cmd = ["git"] + args
        logger.debug("Executing Git command: %s", " ".join(full_cmd))
        try:
            result = subprocess.run(
                full_cmd,
                cwd=self.repo_root,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",  # Replace invalid characters instead of failing
            )
        except OSError as e:
            raise GitError(f"Could not run git: {e}") from e

        if check and result.returncode != 0:
            logger.debug(
                "Git command failed: %s\nSTDOUT: %s\nSTDERR: %s",
                " ".join(full_cmd),
                result.stdout,
                result.stderr,
            )
            # First line only; git follows errors with multi-line hints.
            detail = (result.stderr.strip() or result.stdout.strip()).split("\n", 1)[0]
            message = format_command(full_cmd)
            raise GitError(f"{message}: {detail}" if detail else message)
        return result

    def _lists_tag(self, args: List[str], tag_name: str) -> bool:
        result = self._run(args, check=True)
        return tag_name in _LINE_SPLIT_RE.split(result.stdout)

    # ------------------------------------------------------------------
    # Tags
    # ------------------------------------------------------------------
    def tag_exists(self, tag_name: str) -> bool:
        """Return True if a tag named ``tag_name`` exists."""
        return self._lists_tag(["tag", "-l", tag_name], tag_name)

    def is_head_tag(self, tag_name: str) -> bool:
        """Return True if ``tag_name`` points at the current HEAD commit."""
        return self._lists_tag(["tag", "-l", tag_name, "--points-at", "HEAD"], tag_name)

    def set_tag(
        self,
        tag_name: str,
        message: Optional[str] = None,
        sign: bool = False,
        reporter: Optional[VerboseReporter] = None,
        dry_run: bool = False,
    ) -> None:
        """Create ``tag_name`` at HEAD.

        Parameters
        ----------
        tag_name : str
            Name of the tag to create.
        message : str, optional
            Annotation message; creates an annotated tag when given.
        sign : bool, optional
            If True, create a GPG-signed tag.
        reporter : VerboseReporter, optional
            Receives the command line before it runs.
        dry_run : bool, optional
            If True, only report the command.

        Raises
        ------
        GitError
            If the tag cannot be created.
        """
        cmd = self.build_tag_command(tag_name, message, sign)
        if reporter is not None:
            reporter.emit(f"> {cmd.text}")
        if not dry_run:
            self._run(cmd.args, check=True)

    def push(
        self,
        ref: str,
        remote: str = "origin",
        reporter: Optional[VerboseReporter] = None,
        dry_run: bool = False,
    ) -> None:
        """Push ``ref`` to ``remote``.

        Raises
        ------
        GitError
            If pushing fails.
        """
        cmd = GitCommand(["push", remote, ref])
        if reporter is not None:
            reporter.emit(f"> {cmd.text}")
        if not dry_run:
            self._run(cmd.args, check=True)
