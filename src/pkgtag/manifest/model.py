"""
Validated view of a ``package.json`` document.

:func:`validate_package_manifest` never raises; it returns a
:class:`ManifestValidation` that either carries a
:class:`PackageManifest` or an error message.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class PackageManifest:
    """The parts of ``package.json`` this tool relies on.

    Attributes
    ----------
    version : str
        The ``version`` field.
    package_manager : Any
        The raw ``packageManager`` field, or ``None`` if absent. It is
        kept unvalidated; detection decides whether it is usable.
    raw : Dict[str, Any]
        The whole parsed document.
    """

    version: str
    package_manager: Any = None
    raw: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ManifestValidation:
    """Tagged result of validating a parsed manifest."""

    manifest: Optional[PackageManifest] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, manifest: PackageManifest) -> "ManifestValidation":
        return cls(manifest=manifest)

    @classmethod
    def failure(cls, error: str) -> "ManifestValidation":
        return cls(error=error)


def validate_package_manifest(data: Any) -> ManifestValidation:
    """Check that ``data`` is an object with a string ``version`` field."""
    if not isinstance(data, dict):
        return ManifestValidation.failure("manifest must be a JSON object")
    version = data.get("version")
    if not isinstance(version, str):
        return ManifestValidation.failure("'version' must be a string")
    return ManifestValidation.success(
        PackageManifest(
            version=version,
            package_manager=data.get("packageManager"),
            raw=data,
        )
    )
