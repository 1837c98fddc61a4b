"""
L4 Execution — Binary installation.

Unpacks a verified archive, picks the binary out of it and puts it in
the target directory.  The final copy is atomic: the binary is written
to a hidden temp name next to the destination and renamed over it, so
the target path always holds either the old binary or the new one.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from orca_installer.core.errors import BinaryNotFoundError, InstallPermissionError
from orca_installer.core.services.release_install.execution.archive import ArchiveFormat
from orca_installer.core.services.release_install.execution.subprocess_runner import (
    _run_subprocess,
    sudo_available,
)
from orca_installer.core.services.release_install.execution.workspace import (
    scratch_workspace,
)

logger = logging.getLogger(__name__)

_BINARY_MODE = 0o755


def _atomic_copy(src: Path, dest: Path) -> None:
    tmp = dest.with_name(f".{dest.name}.{os.getpid()}.tmp")
    try:
        shutil.copyfile(src, tmp)
        os.chmod(tmp, _BINARY_MODE)
        os.replace(tmp, dest)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def _sudo_install(src: Path, target_dir: Path, dest: Path) -> dict:
    """The one privileged retry: ``sudo install -m 0755 src dest``."""
    if not target_dir.is_dir():
        made = _run_subprocess(["mkdir", "-p", str(target_dir)], needs_sudo=True)
        if not made["ok"]:
            return made
    return _run_subprocess(
        ["install", "-m", "0755", str(src), str(dest)],
        needs_sudo=True,
    )


def install_binary(src: Path, target_dir: Path, *, escalate: bool = True) -> Path:
    """Copy ``src`` into ``target_dir``, replacing any file of the same name.

    Args:
        src: The binary to install.
        target_dir: Directory to install into; created if missing.
        escalate: On a permission error, retry once through ``sudo``.

    Returns:
        The installed path.

    Raises:
        InstallPermissionError: The directory is not writable and the
            sudo retry was disabled, unavailable, or failed.
    """
    src = Path(src)
    target_dir = Path(target_dir)
    dest = target_dir / src.name

    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        _atomic_copy(src, dest)
    except PermissionError as exc:
        if not escalate:
            raise InstallPermissionError(
                f"Cannot write {dest}: permission denied"
            ) from exc
        if not sudo_available():
            raise InstallPermissionError(
                f"Cannot write {dest}: permission denied and sudo is not available"
            ) from exc

        logger.info("No write access to %s, retrying with sudo", target_dir)
        result = _sudo_install(src, target_dir, dest)
        if not result["ok"]:
            detail = result.get("stderr") or result.get("error", "")
            raise InstallPermissionError(
                f"Cannot write {dest}: sudo install failed: {detail.strip()}"
            ) from exc

    logger.info("Installed %s", dest)
    return dest


def install(
    archive_path: Path,
    expected_binary_name: str,
    target_dir: Path,
    *,
    workdir: Path | None = None,
    escalate: bool = True,
) -> Path:
    """Extract ``archive_path`` and install the binary it contains.

    Args:
        archive_path: A verified release archive.
        expected_binary_name: Filename of the binary at the archive root
            (including ``.exe`` on windows).
        target_dir: Installation directory.
        workdir: Scratch directory to extract into.  Its ``extracted``
            subdirectory is emptied first.  When None, a private scratch
            workspace is created and removed afterwards.
        escalate: Allow one sudo retry for the final copy.

    Returns:
        The installed path, ``target_dir / expected_binary_name``.

    Raises:
        UnsupportedFormatError: Unknown or corrupt archive.
        BinaryNotFoundError: The binary is not at the archive root.
        InstallPermissionError: See ``install_binary``.
    """
    archive_path = Path(archive_path)
    fmt = ArchiveFormat.from_filename(archive_path)

    if workdir is None:
        with scratch_workspace() as scratch:
            return install(
                archive_path, expected_binary_name, target_dir,
                workdir=scratch, escalate=escalate,
            )

    extract_dir = Path(workdir) / "extracted"
    shutil.rmtree(extract_dir, ignore_errors=True)
    fmt.extract(archive_path, extract_dir)

    binary = extract_dir / expected_binary_name
    if not binary.is_file():
        found = sorted(p.name for p in extract_dir.iterdir())
        raise BinaryNotFoundError(
            f"'{expected_binary_name}' not found in {archive_path.name} "
            f"(archive root contains: {', '.join(found) or 'nothing'})"
        )

    return install_binary(binary, target_dir, escalate=escalate)
