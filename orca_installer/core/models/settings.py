"""
Installer settings — which project to install and where it is hosted.

Loaded from ``orca-install.yml`` when one exists; every field has a
default, so an installer with no settings file installs orca-cli from
GitHub.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from orca_installer.core.services.release_install.data.constants import (
    DEFAULT_BIN_DIR,
    DEFAULT_DOWNLOAD_HOST,
    DEFAULT_OWNER,
    DEFAULT_PROJECT_NAME,
    DEFAULT_RELEASE_HOST,
    DEFAULT_REPO,
    DEFAULT_SUPPORTED_PLATFORMS,
    DEFAULT_TIMEOUT,
)


class InstallerSettings(BaseModel):
    """Project identity, hosts and limits for one installer."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    project_name: str = DEFAULT_PROJECT_NAME
    owner: str = DEFAULT_OWNER
    repo: str = DEFAULT_REPO
    binary_name: str = ""  # empty → project_name

    release_host: str = DEFAULT_RELEASE_HOST
    download_host: str = DEFAULT_DOWNLOAD_HOST

    default_bin_dir: str = DEFAULT_BIN_DIR
    supported_platforms: tuple[str, ...] = Field(
        default=DEFAULT_SUPPORTED_PLATFORMS,
    )
    timeout: int = Field(default=DEFAULT_TIMEOUT, gt=0)
    user_agent: str = "orca-installer/1.0"

    @field_validator("release_host", "download_host")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("supported_platforms")
    @classmethod
    def _platform_shape(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for entry in value:
            os_name, sep, arch = entry.partition("/")
            if not sep or not os_name or not arch:
                raise ValueError(f"supported platform must be 'os/arch', got {entry!r}")
        return value

    @property
    def owner_repo(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def effective_binary_name(self) -> str:
        return self.binary_name or self.project_name

    @property
    def releases_page(self) -> str:
        return f"{self.release_host}/{self.owner_repo}/releases"
