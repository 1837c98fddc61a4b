"""
L0 Data — static tables.

Re-exports the platform tables and release-host defaults.
"""

from orca_installer.core.services.release_install.data.constants import (  # noqa: F401
    DEFAULT_SUPPORTED_PLATFORMS,
    KNOWN_ARCH,
    KNOWN_OS,
    LATEST_TAG,
)
