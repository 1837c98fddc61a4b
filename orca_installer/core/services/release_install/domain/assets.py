"""
L1 Domain — Release asset naming (pure).

Builds the metadata URL, archive name and checksum-manifest name for a
release.  No I/O: every value is derived from the settings, the
platform and the resolved tag.
"""

from __future__ import annotations

from urllib.parse import quote

from orca_installer.core.models.platform import Platform
from orca_installer.core.models.release import ReleaseAsset, ReleaseTag
from orca_installer.core.models.settings import InstallerSettings
from orca_installer.core.services.release_install.data.constants import (
    CHECKSUM_SUFFIX,
    LATEST_TAG,
)


def version_from_tag(tag: str) -> str:
    """Strip one leading ``v`` from a tag: ``v1.2.3`` → ``1.2.3``."""
    return tag[1:] if tag.startswith("v") else tag


def release_metadata_url(settings: InstallerSettings, tag: str = LATEST_TAG) -> str:
    """URL of the release-host endpoint describing ``tag`` (or ``latest``).

    The tag is percent-encoded as a single path segment.
    """
    segment = quote(tag or LATEST_TAG, safe="")
    return f"{settings.release_host}/{settings.owner_repo}/releases/{segment}"


def _download_url(settings: InstallerSettings, tag: str, filename: str) -> str:
    segment = quote(tag, safe="")
    return (
        f"{settings.download_host}/{settings.owner_repo}/releases/download/"
        f"{segment}/{quote(filename)}"
    )


def archive_name(project: str, version: str, platform: Platform) -> str:
    """``{project}_{version}_{os}_{arch}.{ext}``."""
    return f"{project}_{version}_{platform.os}_{platform.arch}.{platform.archive_ext}"


def checksum_name(project: str, version: str) -> str:
    """``{project}_{version}_checksums.txt``."""
    return f"{project}_{version}_{CHECKSUM_SUFFIX}"


def archive_asset(
    settings: InstallerSettings,
    release: ReleaseTag,
    platform: Platform,
) -> ReleaseAsset:
    """The binary archive for ``platform`` in ``release``."""
    name = archive_name(settings.project_name, release.version, platform)
    return ReleaseAsset(name=name, url=_download_url(settings, release.tag, name))


def checksum_asset(settings: InstallerSettings, release: ReleaseTag) -> ReleaseAsset:
    """The checksum manifest published with ``release``."""
    name = checksum_name(settings.project_name, release.version)
    return ReleaseAsset(name=name, url=_download_url(settings, release.tag, name))


def binary_filename(name: str, platform: Platform) -> str:
    """Binary name as found in the archive (``.exe`` on windows)."""
    return f"{name}{platform.binary_suffix}"
