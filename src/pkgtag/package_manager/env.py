"""
Detect the package manager from the process environment.

Package managers that run scripts export ``npm_execpath``, the absolute
path of the launcher they were started from. When it is set it names
the exact executable to use. When it is not, ``npm_config_user_agent``
still tells which package manager spawned this process, e.g.
``pnpm/8.6.0 npm/? node/v18.16.0 linux x64``.
"""

from __future__ import annotations

import logging
import ntpath
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from pkgtag.package_manager.types import PackageManagerKind


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


EXEC_PATH_ENV = "npm_execpath"
USER_AGENT_ENV = "npm_config_user_agent"


@dataclass(frozen=True)
class EnvDetection:
    """What the environment says about the running package manager.

    ``exec_path`` is set only when the launcher path was found; ``kind``
    may still be None in that case if the launcher name is not
    recognised.
    """

    kind: Optional[PackageManagerKind] = None
    exec_path: Optional[str] = None


def _basename(path: str) -> str:
    # ntpath splits on both separators
    return ntpath.basename(path)


def kind_from_exec_path(exec_path: str) -> Optional[PackageManagerKind]:
    """Match the launcher's file name against the known kinds by prefix."""
    name = _basename(exec_path).lower()
    for kind in PackageManagerKind:
        if name.startswith(kind.value):
            return kind
    return None


def package_manager_from_user_agent(user_agent: Optional[str]) -> Optional[str]:
    """Return the package manager name at the start of a user agent string.

    >>> package_manager_from_user_agent("yarn/1.22.19 npm/? node/v18.16.0 linux x64")
    'yarn'
    """
    if not user_agent:
        return None
    spec = user_agent.split(" ", 1)[0]
    name, sep, _version = spec.rpartition("/")
    if not sep:
        return None
    return name


def detect_package_manager_from_env(
    environ: Optional[Mapping[str, str]] = None,
) -> EnvDetection:
    """Inspect ``environ`` for the package manager that launched us."""
    env = os.environ if environ is None else environ

    exec_path = env.get(EXEC_PATH_ENV)
    # Empty strings count as unset.
    if exec_path:
        kind = kind_from_exec_path(exec_path)
        logger.debug("%s=%s (kind: %s)", EXEC_PATH_ENV, exec_path, kind)
        return EnvDetection(kind=kind, exec_path=exec_path)

    name = package_manager_from_user_agent(env.get(USER_AGENT_ENV))
    kind = PackageManagerKind.from_name(name)
    if kind is not None:
        logger.debug("%s names %s", USER_AGENT_ENV, kind.value)
    return EnvDetection(kind=kind)
