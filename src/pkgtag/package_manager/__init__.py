"""
Package manager detection.

:func:`resolve_package_manager` combines the environment, manifest and
installed-package detectors into one answer. See
:mod:`pkgtag.package_manager.resolver` for the order they are tried in.
"""

from .resolver import resolve_package_manager  # noqa: F401
from .types import PackageManagerIdentity, PackageManagerKind  # noqa: F401
