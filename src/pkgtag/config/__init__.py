"""
Package manager configuration lookup for pkgtag.

See :mod:`pkgtag.config.reader` for implementation details.
"""

from .reader import (  # noqa: F401
    TAG_VERSION_PREFIX,
    ConfigKeyMapping,
    ConfigListCache,
    ConfigReader,
    get_config,
)
