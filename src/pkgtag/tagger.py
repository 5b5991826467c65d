"""
Create a Git tag for the version in ``package.json``.

The tag name is the package manager's version tag prefix (``v`` unless
configured otherwise) followed by the manifest version, matching the tag
``npm version`` or ``yarn version`` would have created.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pkgtag.config.reader import TAG_VERSION_PREFIX, ConfigReader
from pkgtag.manifest.reader import read_package_manifest
from pkgtag.reporter import VerboseReporter
from pkgtag.vcs.git_client import GitClient


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class TagConflictError(Exception):
    """Raised when the version tag exists but points at another commit."""

    def __init__(self, tag_name: str) -> None:
        super().__init__(f"Git tag '{tag_name}' already exists")
        self.tag_name = tag_name


@dataclass(frozen=True)
class TagOptions:
    """Options for a single tagging run."""

    push: bool = False
    verbose: bool = False
    dry_run: bool = False
    remote: str = "origin"


def get_tag_version_name(cwd: Path, config_reader: Optional[ConfigReader] = None) -> str:
    """Return the tag name for the manifest in ``cwd``.

    Raises
    ------
    ManifestError
        If ``package.json`` is missing, malformed or has no version.
    ProcessError
        If the package manager cannot report its tag prefix.
    """
    manifest = read_package_manifest(cwd / "package.json")
    reader = config_reader or ConfigReader(cwd)
    prefix = reader.get(TAG_VERSION_PREFIX)
    return f"{prefix}{manifest.version}"


def run(
    options: TagOptions,
    cwd: Optional[Path] = None,
    reporter: Optional[VerboseReporter] = None,
    git: Optional[GitClient] = None,
    config_reader: Optional[ConfigReader] = None,
) -> str:
    """Tag the current commit with the package version.

    An existing tag is accepted only when it already points at HEAD.

    Returns
    -------
    str
        The tag name.

    Raises
    ------
    TagConflictError
        If the tag exists on a different commit.
    GitError
        If a Git command fails.
    """
    if reporter is None:
        with VerboseReporter(options.verbose) as own_reporter:
            return run(options, cwd, own_reporter, git, config_reader)

    cwd = cwd or Path.cwd()
    git = git or GitClient(cwd)

    tag_name = get_tag_version_name(cwd, config_reader)
    logger.debug("Version tag name: %s", tag_name)

    if git.tag_exists(tag_name):
        if not git.is_head_tag(tag_name):
            raise TagConflictError(tag_name)
        reporter.emit(f"> #git tag {tag_name}\n  # tag '{tag_name}' already exists")
    else:
        git.set_tag(tag_name, reporter=reporter, dry_run=options.dry_run)

    if options.push:
        git.push(tag_name, remote=options.remote, reporter=reporter, dry_run=options.dry_run)

    return tag_name
