"""
Manifest file access for pkgtag.

Three outcomes of reading a JSON manifest are kept apart because the
callers treat them differently:

* the file does not exist: ``None`` is returned when the caller allows
  it, so directory walks can move on to the next ancestor;
* the file exists but is not valid JSON: :class:`ManifestParseError`,
  which must abort the walk;
* any other I/O failure: :class:`ManifestReadError`.

Error messages name the file relative to the current directory.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from pkgtag.manifest.model import PackageManifest, validate_package_manifest
from pkgtag.paths import relative_path


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class ManifestError(Exception):
    """Base class for manifest failures."""

    def __init__(self, message: str, path: Union[str, Path]) -> None:
        super().__init__(message)
        self.path = Path(path)


class ManifestParseError(ManifestError):
    """Raised when a manifest exists but does not contain a JSON object."""


class ManifestReadError(ManifestError):
    """Raised when a manifest cannot be read."""


class ManifestValidationError(ManifestError):
    """Raised when the project manifest lacks the fields pkgtag needs."""


def read_json_file(
    path: Union[str, Path], allow_missing: bool = False, default: Any = None
) -> Any:
    """Read and parse the JSON document at ``path``.

    Parameters
    ----------
    path : str or Path
        File to read.
    allow_missing : bool, optional
        If True, a missing file yields ``default`` instead of an error.
    default : Any, optional
        Value returned for a missing file. Pass a sentinel to tell a
        missing file apart from a document that is literally ``null``.

    Raises
    ------
    ManifestReadError
        If the file cannot be read (including a missing file when
        ``allow_missing`` is False).
    ManifestParseError
        If the content is not valid JSON.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        if allow_missing:
            logger.debug("No manifest at %s", path)
            return default
        raise ManifestReadError(
            f"Could not read file: {relative_path(path)}", path
        ) from exc
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Failed to read %s: %s", path, exc)
        raise ManifestReadError(
            f"Could not read file: {relative_path(path)}", path
        ) from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestParseError(
            f"Invalid JSON: {relative_path(path)}", path
        ) from exc


def read_package_manifest(path: Union[str, Path]) -> PackageManifest:
    """Read the project's ``package.json`` and validate it.

    Raises
    ------
    ManifestReadError, ManifestParseError
        See :func:`read_json_file`.
    ManifestValidationError
        If the document has no string ``version`` field.
    """
    data = read_json_file(path)
    result = validate_package_manifest(data)
    if not result.ok or result.manifest is None:
        logger.debug("Manifest validation failed for %s: %s", path, result.error)
        raise ManifestValidationError(
            f"Failed to find version tag name: {result.error or 'no manifest'} in {relative_path(path)}",
            path,
        )
    return result.manifest
