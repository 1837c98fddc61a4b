"""
L3 Detection — Host platform.

Maps the raw ``platform.system()`` / ``platform.machine()`` strings to
Go-style GOOS/GOARCH names and checks the pair against the allowlist of
platforms that releases are published for.  Read-only: the only side
effect is logging what was discovered.
"""

from __future__ import annotations

import logging
import platform as _platform
from collections.abc import Iterable

from orca_installer.core.errors import UnsupportedPlatformError
from orca_installer.core.models.platform import Platform
from orca_installer.core.services.release_install.data.constants import (
    _ARM_PREFIXES,
    _IARCH_MAP,
    _WINDOWS_OS_PREFIXES,
    DEFAULT_SUPPORTED_PLATFORMS,
    KNOWN_ARCH,
    KNOWN_OS,
)

logger = logging.getLogger(__name__)


def normalize_os(raw: str) -> str:
    """Lowercase the OS name and fold Windows subsystems into ``windows``."""
    os_name = raw.strip().lower()
    if os_name.startswith(_WINDOWS_OS_PREFIXES):
        return "windows"
    return os_name


def normalize_arch(raw: str) -> str:
    """Map a ``uname -m`` style machine name to its GOARCH name.

    Unknown names pass through lowercased so the caller can report
    what they were converted to.
    """
    machine = raw.strip()
    if machine in _IARCH_MAP:
        return _IARCH_MAP[machine]
    machine = machine.lower()
    if machine in _IARCH_MAP:
        return _IARCH_MAP[machine]
    for prefix in _ARM_PREFIXES:
        if machine.startswith(prefix):
            return prefix
    return machine


def is_supported(platform: Platform, supported: Iterable[str] = DEFAULT_SUPPORTED_PLATFORMS) -> bool:
    return platform.name in set(supported)


def validate_platform(
    os_name: str,
    arch: str,
    supported: Iterable[str] = DEFAULT_SUPPORTED_PLATFORMS,
    *,
    raw_os: str | None = None,
    raw_arch: str | None = None,
) -> Platform:
    """Check an already-normalized pair and return it as a Platform.

    Raises:
        UnsupportedPlatformError: If the OS or arch is not a known
            GOOS/GOARCH value, or the pair is not in ``supported``.
    """
    if os_name not in KNOWN_OS:
        raise UnsupportedPlatformError(
            f"OS check: '{raw_os or os_name}' got converted to '{os_name}', "
            "which is not a supported GOOS value."
        )
    if arch not in KNOWN_ARCH:
        raise UnsupportedPlatformError(
            f"Architecture check: '{raw_arch or arch}' got converted to '{arch}', "
            "which is not a supported GOARCH value."
        )

    result = Platform(os=os_name, arch=arch)
    if not is_supported(result, supported):
        raise UnsupportedPlatformError(
            f"Platform check: Platform {result.name} is not supported. "
            f"Supported platforms: {', '.join(sorted(set(supported)))}."
        )

    logger.info("Platform check: Platform %s is supported", result.name)
    return result


def detect(
    system: str | None = None,
    machine: str | None = None,
    supported: Iterable[str] = DEFAULT_SUPPORTED_PLATFORMS,
) -> Platform:
    """Detect the host platform and validate it.

    Args:
        system: Raw OS name; defaults to ``platform.system()``.
        machine: Raw machine name; defaults to ``platform.machine()``.
        supported: Allowlist of ``os/arch`` strings.

    Returns:
        The normalized, supported Platform.

    Raises:
        UnsupportedPlatformError: See ``validate_platform``.
    """
    raw_os = system if system is not None else _platform.system()
    raw_arch = machine if machine is not None else _platform.machine()

    os_name = normalize_os(raw_os)
    logger.info("Discovered os: %s", os_name)
    arch = normalize_arch(raw_arch)
    logger.info("Discovered architecture: %s", arch)

    return validate_platform(
        os_name, arch, supported, raw_os=raw_os, raw_arch=raw_arch,
    )
