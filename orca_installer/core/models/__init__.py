"""
Domain models — Pydantic types for the installer.

All models are re-exported here for convenient access:

    from orca_installer.core.models import Platform, ReleaseTag, InstallPlan
"""

from orca_installer.core.models.manifest import ChecksumManifest, ChecksumRecord
from orca_installer.core.models.plan import InstallPlan
from orca_installer.core.models.platform import Platform
from orca_installer.core.models.release import ReleaseAsset, ReleaseTag
from orca_installer.core.models.settings import InstallerSettings

__all__ = [
    "ChecksumManifest",
    "ChecksumRecord",
    "InstallPlan",
    "InstallerSettings",
    "Platform",
    "ReleaseAsset",
    "ReleaseTag",
]
