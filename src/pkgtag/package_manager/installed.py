"""
Detect the package manager from what it left on disk.

Each package manager writes its own metadata into ``node_modules`` when
it installs dependencies, and its own lockfile next to ``package.json``.
The nearest directory with any of these markers decides.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from pkgtag.package_manager.manifest_field import is_dependency_dir
from pkgtag.package_manager.types import PackageManagerIdentity, PackageManagerKind
from pkgtag.paths import walk_parent_dirs


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


# Probed in order at every directory level.
INSTALL_MARKERS: Tuple[Tuple[str, PackageManagerKind], ...] = (
    ("node_modules/.modules.yaml", PackageManagerKind.PNPM),
    ("node_modules/.yarn-state.yml", PackageManagerKind.YARN),
    ("node_modules/.yarn-integrity", PackageManagerKind.YARN),
    ("node_modules/.package-lock.json", PackageManagerKind.NPM),
    ("pnpm-lock.yaml", PackageManagerKind.PNPM),
    ("yarn.lock", PackageManagerKind.YARN),
    ("package-lock.json", PackageManagerKind.NPM),
    ("npm-shrinkwrap.json", PackageManagerKind.NPM),
)


def find_install_marker(directory: Path) -> Optional[Tuple[Path, PackageManagerKind]]:
    """Return the first marker present in ``directory`` and its kind."""
    for relpath, kind in INSTALL_MARKERS:
        marker = directory / relpath
        if marker.is_file():
            return marker, kind
    return None


def detect_from_installed_packages(
    cwd: Union[str, Path],
) -> Optional[PackageManagerIdentity]:
    for dirpath in walk_parent_dirs(cwd):
        if is_dependency_dir(dirpath):
            continue
        found = find_install_marker(dirpath)
        if found is not None:
            marker, kind = found
            logger.debug("Found %s, using %s", marker, kind.value)
            return PackageManagerIdentity(kind=kind, executable=kind.value)
    return None
