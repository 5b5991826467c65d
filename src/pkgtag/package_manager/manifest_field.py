"""
Detect the package manager from the ``packageManager`` field.

The lookup follows Corepack: walk from the working directory towards
the root, ignoring directories that are themselves installed
dependencies, and stop at the first ``package.json`` whose
``packageManager`` field is truthy. A value that is not a well-formed
``<name>@<version>`` for a known package manager is ignored rather than
reported, since this tool is not the one enforcing the field.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Optional, Union

from pkgtag.manifest.reader import ManifestParseError, read_json_file
from pkgtag.package_manager.types import PackageManagerIdentity, PackageManagerKind
from pkgtag.paths import relative_path, walk_parent_dirs


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


MANIFEST_NAME = "package.json"
FIELD_NAME = "packageManager"

_MISSING = object()

# <anything>/node_modules/<pkg> or <anything>/node_modules/@<scope>/<pkg>
NODE_MODULES_DIR_RE = re.compile(
    r"[\\/]node_modules[\\/](?:@[^\\/]*[\\/])?(?:[^@\\/][^\\/]*)$"
)
PACKAGE_MANAGER_SPEC_RE = re.compile(r"^(?!_)(.+)@.")


def is_dependency_dir(path: Union[str, Path]) -> bool:
    """Return True if ``path`` is a package inside a ``node_modules`` tree."""
    return NODE_MODULES_DIR_RE.search(str(path)) is not None


def parse_package_manager_spec(value: Any) -> Optional[PackageManagerKind]:
    """Return the kind declared by a ``packageManager`` value, if valid."""
    if not isinstance(value, str):
        return None
    match = PACKAGE_MANAGER_SPEC_RE.match(value)
    if not match:
        return None
    return PackageManagerKind.from_name(match.group(1))


def find_package_manager_field(cwd: Union[str, Path]) -> Any:
    """Return the first truthy ``packageManager`` value above ``cwd``.

    Raises
    ------
    ManifestParseError
        If a ``package.json`` on the way is not a JSON object.
    """
    for dirpath in walk_parent_dirs(cwd):
        if is_dependency_dir(dirpath):
            continue

        manifest_path = dirpath / MANIFEST_NAME
        data = read_json_file(manifest_path, allow_missing=True, default=_MISSING)
        if data is _MISSING:
            continue
        if not isinstance(data, dict):
            raise ManifestParseError(
                f"Invalid package.json: {relative_path(manifest_path)}",
                manifest_path,
            )

        value = data.get(FIELD_NAME)
        if value:
            logger.debug("Found %s=%r in %s", FIELD_NAME, value, manifest_path)
            return value
    return None


def detect_from_package_manager_field(
    cwd: Union[str, Path],
) -> Optional[PackageManagerIdentity]:
    kind = parse_package_manager_spec(find_package_manager_field(cwd))
    if kind is None:
        return None
    return PackageManagerIdentity(kind=kind, executable=kind.value)
