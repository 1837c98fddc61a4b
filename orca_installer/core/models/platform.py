"""
Platform model — the normalized (os, arch) pair of the install host.

Computed once per run by the platform detector and never mutated.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Platform(BaseModel):
    """A normalized GOOS/GOARCH pair, e.g. ``linux/amd64``."""

    model_config = ConfigDict(frozen=True)

    os: str
    arch: str

    @property
    def name(self) -> str:
        return f"{self.os}/{self.arch}"

    @property
    def is_windows(self) -> bool:
        return self.os == "windows"

    @property
    def archive_ext(self) -> str:
        """Extension of the release archive published for this platform."""
        return "zip" if self.is_windows else "tar.gz"

    @property
    def binary_suffix(self) -> str:
        return ".exe" if self.is_windows else ""

    def __str__(self) -> str:
        return self.name
