"""
Path helpers shared by the manifest reader and the package manager
detectors.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, Optional, Union

PathLike = Union[str, "os.PathLike[str]"]


def walk_parent_dirs(start: PathLike, resolve: bool = True) -> Iterator[Path]:
    """Yield ``start`` and each of its ancestors up to the filesystem root.

    The walk is pure path arithmetic: nothing is read from disk except
    when ``resolve`` is True, in which case ``start`` is made absolute
    first. Each call returns a fresh generator, so the sequence can be
    walked again.
    """
    current = Path(os.path.abspath(start)) if resolve else Path(start)
    while True:
        yield current
        parent = current.parent
        if parent == current:
            # reached filesystem root
            return
        current = parent


def relative_path(path: PathLike, cwd: Optional[PathLike] = None) -> str:
    """Return ``path`` relative to ``cwd`` for use in error messages.

    Paths inside ``cwd`` get a leading ``./`` so they read unambiguously
    as file paths, e.g. ``./package.json``.
    """
    base = os.fspath(cwd) if cwd is not None else os.getcwd()
    try:
        rel = os.path.relpath(os.fspath(path), base)
    except ValueError:
        # different drive on Windows
        return os.fspath(path)
    if os.path.isabs(rel) or rel.startswith("."):
        return rel
    return f".{os.sep}{rel}"
