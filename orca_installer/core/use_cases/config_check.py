"""
Config check use case — validate orca-install.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from orca_installer.core.config.loader import ConfigError, find_settings_file, load_settings
from orca_installer.core.models.settings import InstallerSettings
from orca_installer.core.services.release_install.data.constants import KNOWN_ARCH, KNOWN_OS


@dataclass
class ConfigCheckResult:
    """Result of settings validation."""

    valid: bool = False
    settings: InstallerSettings | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "project_name": self.settings.project_name if self.settings else None,
            "repository": self.settings.owner_repo if self.settings else None,
            "supported_platforms": (
                list(self.settings.supported_platforms) if self.settings else []
            ),
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate installer settings and report issues.

    A missing settings file is not an error: the built-in defaults are
    checked instead and a warning says so.

    Args:
        config_path: Optional explicit path to orca-install.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_settings_file()
        if config_path is None:
            result.warnings.append("No orca-install.yml found — using built-in defaults.")

    result.config_path = config_path

    try:
        settings = load_settings(config_path, search=False)
        result.settings = settings
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    # Semantic checks
    if not settings.supported_platforms:
        result.errors.append("supported_platforms is empty — nothing can be installed.")

    for entry in settings.supported_platforms:
        os_name, _, arch = entry.partition("/")
        if os_name not in KNOWN_OS:
            result.errors.append(f"Unknown OS '{os_name}' in supported platform '{entry}'")
        if arch not in KNOWN_ARCH:
            result.errors.append(f"Unknown architecture '{arch}' in supported platform '{entry}'")

    dupes = sorted({p for p in settings.supported_platforms
                    if settings.supported_platforms.count(p) > 1})
    if dupes:
        result.warnings.append(f"Duplicate supported platforms: {', '.join(dupes)}")

    for host_field in ("release_host", "download_host"):
        host = getattr(settings, host_field)
        if not host.startswith(("https://", "http://")):
            result.errors.append(f"{host_field} must be an http(s) URL, got '{host}'")
        elif host.startswith("http://"):
            result.warnings.append(f"{host_field} uses plain http: {host}")

    result.valid = not result.errors
    return result
