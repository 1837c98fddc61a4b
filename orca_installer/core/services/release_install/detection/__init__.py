"""
L3 Detection — read-only host probes.
"""

from orca_installer.core.services.release_install.detection.platform import (  # noqa: F401
    detect,
    is_supported,
    normalize_arch,
    normalize_os,
    validate_platform,
)
