"""
L4 Execution — Privileged command runner.

The single place where the installer shells out.  Only used for the
one sudo retry allowed when copying the binary into a directory the
current user cannot write.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from typing import Any

logger = logging.getLogger(__name__)


def sudo_available() -> bool:
    """True when a ``sudo`` binary exists and we are not already root."""
    if not hasattr(os, "geteuid"):
        return False  # Windows
    if os.geteuid() == 0:
        return False
    return shutil.which("sudo") is not None


def _run_subprocess(
    cmd: list[str],
    *,
    needs_sudo: bool = False,
    timeout: int = 300,
) -> dict[str, Any]:
    """Run a command, optionally prefixed with ``sudo``.

    stdin is inherited so sudo can prompt for a password on the
    terminal; the password never passes through this process.
    stdout/stderr are captured.

    Args:
        cmd: Command list for ``subprocess.run()``.
        needs_sudo: Prefix the command with ``sudo``.
        timeout: Seconds before ``TimeoutExpired``; generous because the
            user may be typing a password.

    Returns:
        ``{"ok": True, "stdout": "...", "elapsed_ms": N}`` on success,
        ``{"ok": False, "error": "...", ...}`` on failure.
    """
    if needs_sudo:
        cmd = ["sudo"] + cmd

    logger.debug("Running: %s", " ".join(cmd))
    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return {"ok": False, "error": f"Command timed out ({timeout}s)"}
    except OSError as e:
        return {"ok": False, "error": str(e)}

    elapsed_ms = int((time.monotonic() - start) * 1000)
    if result.returncode == 0:
        return {
            "ok": True,
            "stdout": result.stdout[-2000:] if result.stdout else "",
            "elapsed_ms": elapsed_ms,
        }

    stderr = result.stderr[-2000:] if result.stderr else ""
    if needs_sudo and (
        "incorrect password" in stderr.lower()
        or "sorry" in stderr.lower()
    ):
        return {"ok": False, "error": "sudo authentication failed", "stderr": stderr}

    return {
        "ok": False,
        "error": f"Command failed (exit {result.returncode})",
        "stderr": stderr,
        "elapsed_ms": elapsed_ms,
    }
