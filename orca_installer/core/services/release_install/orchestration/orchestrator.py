"""
L5 Orchestration — The install pipeline.

    detect platform → resolve tag → fetch archive → fetch manifest
        → verify → extract + install

``build_plan`` does everything that only needs the network for
metadata and freezes the result into an ``InstallPlan``.  ``run_install``
executes a plan inside a scratch workspace.  Stages run strictly in
order; the first failure raises and nothing reaches the target
directory unless every earlier stage succeeded.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from orca_installer.core.models.plan import InstallPlan
from orca_installer.core.models.platform import Platform
from orca_installer.core.models.settings import InstallerSettings
from orca_installer.core.services.release_install.detection.platform import (
    detect,
    validate_platform,
)
from orca_installer.core.services.release_install.domain.assets import (
    archive_asset,
    binary_filename,
    checksum_asset,
)
from orca_installer.core.services.release_install.execution.download import fetch
from orca_installer.core.services.release_install.execution.install import install
from orca_installer.core.services.release_install.execution.verify import verify
from orca_installer.core.services.release_install.execution.workspace import (
    scratch_workspace,
)
from orca_installer.core.services.release_install.resolver.release import resolve

logger = logging.getLogger(__name__)

_ROSETTA_HINT = (
    "Apple silicon may require Rosetta 2; install it with "
    "'/usr/sbin/softwareupdate --install-rosetta' if the binary does not start."
)


def _trace(plan: InstallPlan, stage: str, **fields: object) -> None:
    """Echo a stage to stderr in ``-x`` mode, shell style."""
    if not plan.trace:
        return
    detail = " ".join(f"{k}={v}" for k, v in fields.items())
    print(f"+ {stage} {detail}".rstrip(), file=sys.stderr, flush=True)


def detect_platform(
    settings: InstallerSettings,
    *,
    os_name: str | None = None,
    arch: str | None = None,
) -> Platform:
    """Detect the host platform, or validate an explicit override."""
    if os_name and arch:
        return validate_platform(os_name, arch, settings.supported_platforms)
    return detect(system=os_name, machine=arch, supported=settings.supported_platforms)


def build_plan(
    settings: InstallerSettings,
    *,
    requested_tag: str = "",
    bin_dir: Path | str | None = None,
    platform: Platform | None = None,
    tmp_root: Path | None = None,
    escalate: bool = True,
    trace: bool = False,
) -> InstallPlan:
    """Detect, resolve and name everything the install needs.

    Platform validation happens before any network access.

    Raises:
        UnsupportedPlatformError: Host platform not supported.
        ResolutionError: The tag could not be resolved.
    """
    if platform is None:
        platform = detect_platform(settings)

    release = resolve(settings.owner_repo, requested_tag, settings=settings)
    logger.info(
        "Found version: %s for %s/%s",
        release.version, release.tag, platform.name,
    )

    return InstallPlan(
        settings=settings,
        platform=platform,
        release=release,
        archive=archive_asset(settings, release, platform),
        checksums=checksum_asset(settings, release),
        binary_name=binary_filename(settings.effective_binary_name, platform),
        bin_dir=Path(bin_dir or settings.default_bin_dir).expanduser(),
        tmp_root=tmp_root,
        escalate=escalate,
        trace=trace,
    )


def run_install(plan: InstallPlan) -> Path:
    """Fetch, verify and install according to ``plan``.

    Returns:
        The installed binary path.

    Raises:
        DownloadError, ChecksumMissingError, ChecksumMismatchError,
        UnsupportedFormatError, BinaryNotFoundError, InstallPermissionError.
    """
    headers = {"User-Agent": plan.settings.user_agent}
    timeout = plan.settings.timeout

    with scratch_workspace(plan.tmp_root) as workdir:
        _trace(plan, "workspace", path=workdir)

        _trace(plan, "fetch", url=plan.archive.url)
        archive_path = fetch(plan.archive.url, workdir / plan.archive.name, headers, timeout=timeout)

        _trace(plan, "fetch", url=plan.checksums.url)
        manifest_path = fetch(
            plan.checksums.url, workdir / plan.checksums.name, headers, timeout=timeout,
        )

        _trace(plan, "verify", file=archive_path.name, manifest=manifest_path.name)
        verify(archive_path, manifest_path)

        _trace(plan, "install", binary=plan.binary_name, bin_dir=plan.bin_dir)
        installed = install(
            archive_path,
            plan.binary_name,
            plan.bin_dir,
            workdir=workdir,
            escalate=plan.escalate,
        )

    if plan.platform.name == "darwin/arm64":
        logger.info(_ROSETTA_HINT)
    return installed
