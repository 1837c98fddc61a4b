"""
Install use case — settings + pipeline, wrapped for the CLI.

Errors from the pipeline are caught here and returned on the result,
so the CLI only has to decide how to render them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from orca_installer.core.config.loader import ConfigError, load_settings
from orca_installer.core.errors import InstallerError
from orca_installer.core.models.plan import InstallPlan
from orca_installer.core.models.settings import InstallerSettings
from orca_installer.core.services.release_install.orchestration.orchestrator import (
    build_plan,
    detect_platform,
    run_install,
)

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Outcome of a resolve-only or full install run."""

    plan: InstallPlan | None = None
    installed_path: Path | None = None
    error: str | None = None
    error_type: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        result: dict = {"ok": self.ok}
        if self.error:
            result["error"] = self.error
            result["error_type"] = self.error_type
        if self.plan:
            result["plan"] = self.plan.to_dict()
        if self.installed_path:
            result["installed_path"] = str(self.installed_path)
        return result


def _fail(exc: Exception, plan: InstallPlan | None = None) -> InstallResult:
    logger.debug("Install pipeline failed", exc_info=True)
    return InstallResult(plan=plan, error=str(exc), error_type=type(exc).__name__)


def install_release(
    *,
    config_path: Path | None = None,
    settings: InstallerSettings | None = None,
    requested_tag: str = "",
    bin_dir: Path | str | None = None,
    os_name: str | None = None,
    arch: str | None = None,
    tmp_root: Path | None = None,
    escalate: bool = True,
    trace: bool = False,
    dry_run: bool = False,
) -> InstallResult:
    """Resolve and (unless ``dry_run``) install a release.

    Args:
        config_path: Settings file; searched for when None.
        settings: Pre-loaded settings; wins over ``config_path``.
        requested_tag: Tag to install, empty for latest.
        bin_dir: Installation directory; settings default when None.
        os_name: Override the detected OS (normalized GOOS name).
        arch: Override the detected architecture (GOARCH name).
        tmp_root: Parent directory of the scratch workspace.
        escalate: Allow one sudo retry for the final copy.
        trace: Echo pipeline stages to stderr.
        dry_run: Stop after resolving; nothing is downloaded.
    """
    plan: InstallPlan | None = None
    try:
        if settings is None:
            settings = load_settings(config_path)
        platform = detect_platform(settings, os_name=os_name, arch=arch)
        plan = build_plan(
            settings,
            requested_tag=requested_tag,
            bin_dir=bin_dir,
            platform=platform,
            tmp_root=tmp_root,
            escalate=escalate,
            trace=trace,
        )
        if dry_run:
            return InstallResult(plan=plan)
        installed = run_install(plan)
    except (InstallerError, ConfigError) as exc:
        return _fail(exc, plan)

    return InstallResult(plan=plan, installed_path=installed)
