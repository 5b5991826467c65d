"""
Command line interface for pkgtag.

This module defines the ``main`` function which is used as the entry
point when executing the ``pkgtag`` command. It reads the options,
sets up logging and verbose output, runs :func:`pkgtag.tagger.run` and
turns failures into a one-line message and an exit code.
"""

from __future__ import annotations

import logging
import platform
import sys
from pathlib import Path

import click

from pkgtag import __version__
from pkgtag.manifest.reader import ManifestError
from pkgtag.reporter import VerboseReporter
from pkgtag.runner import ProcessError
from pkgtag.tagger import TagConflictError, TagOptions, run
from pkgtag.vcs.git_client import GitError

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


PROG_NAME = "pkgtag"

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------
EXIT_SUCCESS = 0
EXIT_GENERIC_ERROR = 1
EXIT_INVALID_USAGE = 2
EXIT_MANIFEST_ERROR = 3
EXIT_PACKAGE_MANAGER_FAILURE = 4
EXIT_VCS_FAILURE = 5
EXIT_TAG_CONFLICT = 6


def print_error(message: str) -> None:
    """Print a single-line error message to stderr."""
    first_line = message.splitlines()[0] if message else message
    click.echo(f"✗ {first_line}", err=True)


def version_message() -> str:
    return (
        f"%(prog)s/%(version)s {sys.platform}-{platform.machine()} "
        f"python-{platform.python_version()}"
    )


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--push/--no-push", default=False, help="`git push` the added tag to the remote repository.")
@click.option("--verbose/--no-verbose", default=False, help="Show details of executed git commands.")
@click.option("-n", "--dry-run/--no-dry-run", "dry_run", default=False, help="Perform a trial run with no changes made.")
@click.option("--debug", is_flag=True, hidden=True, envvar="PKGTAG_DEBUG", help="Log internal debug messages to stderr.")
@click.version_option(
    __version__,
    "-V",
    "-v",
    "--version",
    prog_name=PROG_NAME,
    message=version_message(),
)
def main(push: bool, verbose: bool, dry_run: bool, debug: bool) -> None:
    """Add a Git tag for the version in package.json.

    The tag prefix comes from the package manager's configuration
    (`tag-version-prefix` for npm and pnpm, `version-tag-prefix` for
    yarn).
    """
    if dry_run:
        click.echo("Dry Run enabled", err=True)
        verbose = True

    # Use force=True so handlers are reconfigured on repeated invocations
    # (important for tests).
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(levelname)s: %(message)s",
        force=True,
    )

    options = TagOptions(push=push, verbose=verbose, dry_run=dry_run)

    try:
        with VerboseReporter(options.verbose) as reporter:
            tag_name = run(options, cwd=Path.cwd(), reporter=reporter)
        logger.debug("Done: %s", tag_name)
    except ManifestError as exc:
        print_error(str(exc))
        raise click.exceptions.Exit(EXIT_MANIFEST_ERROR)
    except ProcessError as exc:
        print_error(str(exc))
        raise click.exceptions.Exit(EXIT_PACKAGE_MANAGER_FAILURE)
    except TagConflictError as exc:
        print_error(str(exc))
        raise click.exceptions.Exit(EXIT_TAG_CONFLICT)
    except GitError as exc:
        print_error(f"Git error: {exc}")
        raise click.exceptions.Exit(EXIT_VCS_FAILURE)
    except Exception as exc:
        logger.debug("Unhandled error", exc_info=True)
        print_error(f"Unexpected error: {exc}")
        raise click.exceptions.Exit(EXIT_GENERIC_ERROR)
