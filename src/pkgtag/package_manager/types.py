"""
Types shared by the package manager detectors and the resolver.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple


class PackageManagerKind(str, Enum):
    """The package managers pkgtag knows how to drive."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"

    @classmethod
    def from_name(cls, value: Any) -> Optional["PackageManagerKind"]:
        """Return the kind named exactly ``value``, or None.

        Matching is case-sensitive: ``"Yarn"`` is not a known kind.
        """
        if not isinstance(value, str):
            return None
        return _KINDS_BY_NAME.get(value)


_KINDS_BY_NAME = {kind.value: kind for kind in PackageManagerKind}


@dataclass(frozen=True)
class PackageManagerIdentity:
    """A resolved package manager and the command used to run it.

    Attributes
    ----------
    kind : PackageManagerKind or None
        The detected package manager, or None if it is unknown.
    executable : str
        Program to spawn, e.g. ``"pnpm"`` or a path to a launcher.
    prefix_args : Tuple[str, ...]
        Arguments placed before the subcommand, e.g. the path of a
        JavaScript launcher when ``executable`` is the node interpreter.
    """

    kind: Optional[PackageManagerKind]
    executable: str
    prefix_args: Tuple[str, ...] = ()

    @property
    def name(self) -> Optional[str]:
        return self.kind.value if self.kind is not None else None

    @property
    def spawn_args(self) -> Tuple[str, List[str]]:
        return self.executable, list(self.prefix_args)

    def command(self, *args: str) -> List[str]:
        """Return the full argument vector for running ``args``."""
        return [self.executable, *self.prefix_args, *args]
