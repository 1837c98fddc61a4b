"""
InstallPlan — the immutable configuration of one install attempt.

Assembled once, after platform detection, argument parsing and tag
resolution, and passed to every later stage.  Nothing downstream
reads globals or environment variables.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from orca_installer.core.models.platform import Platform
from orca_installer.core.models.release import ReleaseAsset, ReleaseTag
from orca_installer.core.models.settings import InstallerSettings


class InstallPlan(BaseModel):
    """Everything the fetch → verify → install stages need."""

    model_config = ConfigDict(frozen=True)

    settings: InstallerSettings
    platform: Platform
    release: ReleaseTag
    archive: ReleaseAsset
    checksums: ReleaseAsset
    binary_name: str
    bin_dir: Path

    tmp_root: Path | None = None
    escalate: bool = True
    trace: bool = False

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "project": self.settings.project_name,
            "repository": self.settings.owner_repo,
            "platform": self.platform.name,
            "tag": self.release.tag,
            "version": self.release.version,
            "archive": {"name": self.archive.name, "url": self.archive.url},
            "checksums": {"name": self.checksums.name, "url": self.checksums.url},
            "binary": self.binary_name,
            "bin_dir": str(self.bin_dir),
        }
