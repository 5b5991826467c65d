"""
Work out which package manager governs a directory.

Strategies are tried in order and the first one that answers wins:

1. ``npm_execpath``: the exact launcher that started this process;
2. ``npm_config_user_agent``: the package manager that spawned us;
3. the ``packageManager`` field of the nearest ``package.json``;
4. lockfiles and ``node_modules`` metadata;
5. plain ``npm``.

Resolution only reads files and environment variables, so repeated
calls against an unchanged directory tree give the same answer.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Mapping, Optional, Sequence, Union

from pkgtag.package_manager.env import detect_package_manager_from_env
from pkgtag.package_manager.installed import detect_from_installed_packages
from pkgtag.package_manager.manifest_field import detect_from_package_manager_field
from pkgtag.package_manager.types import PackageManagerIdentity


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


DEFAULT_EXECUTABLE = "npm"
JS_FILE_EXTENSIONS = (".cjs", ".mjs", ".js")

Detector = Callable[[Union[str, Path]], Optional[PackageManagerIdentity]]

DIRECTORY_DETECTORS: Sequence[Detector] = (
    detect_from_package_manager_field,
    detect_from_installed_packages,
)


def is_js_path(path: str) -> bool:
    """Return True if ``path`` is a JavaScript file that needs node.

    Only a real extension counts, so a bare ``.js`` file name does not.
    """
    return os.path.splitext(path)[1] in JS_FILE_EXTENSIONS


def node_interpreter(environ: Optional[Mapping[str, str]] = None) -> str:
    """Return the JavaScript interpreter the package manager runs on."""
    env = os.environ if environ is None else environ
    return env.get("npm_node_execpath") or env.get("NODE") or "node"


def resolve_package_manager(
    cwd: Union[str, Path],
    environ: Optional[Mapping[str, str]] = None,
    detectors: Sequence[Detector] = DIRECTORY_DETECTORS,
) -> PackageManagerIdentity:
    """Return the package manager identity for ``cwd``.

    Parameters
    ----------
    cwd : str or Path
        Directory whose package manager is wanted.
    environ : Mapping[str, str], optional
        Environment to inspect; defaults to ``os.environ``.
    detectors : Sequence[Detector], optional
        Directory-based strategies tried after the environment.

    Raises
    ------
    ManifestParseError
        If a ``package.json`` met while walking up is malformed.
    """
    env = os.environ if environ is None else environ

    detected = detect_package_manager_from_env(env)
    if detected.exec_path:
        if is_js_path(detected.exec_path):
            identity = PackageManagerIdentity(
                kind=detected.kind,
                executable=node_interpreter(env),
                prefix_args=(detected.exec_path,),
            )
        else:
            identity = PackageManagerIdentity(
                kind=detected.kind, executable=detected.exec_path
            )
        logger.debug("Resolved package manager from launcher: %s", identity)
        return identity
    if detected.kind is not None:
        identity = PackageManagerIdentity(
            kind=detected.kind, executable=detected.kind.value
        )
        logger.debug("Resolved package manager from user agent: %s", identity)
        return identity

    for detector in detectors:
        identity = detector(cwd)
        if identity is not None:
            logger.debug(
                "Resolved package manager with %s: %s", detector.__name__, identity
            )
            return identity

    logger.debug("No package manager detected, defaulting to %s", DEFAULT_EXECUTABLE)
    return PackageManagerIdentity(kind=None, executable=DEFAULT_EXECUTABLE)
