"""
Reading and validating ``package.json`` manifests.

See :mod:`pkgtag.manifest.reader` for the file access rules and
:mod:`pkgtag.manifest.model` for the validated manifest type.
"""

from .model import ManifestValidation, PackageManifest, validate_package_manifest  # noqa: F401
from .reader import (  # noqa: F401
    ManifestError,
    ManifestParseError,
    ManifestReadError,
    ManifestValidationError,
    read_json_file,
    read_package_manifest,
)
