"""
Logging configuration — central setup for the installer CLI.

Called once at startup by main.py.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Levels are resolved in precedence order:
    CLI flag  >  ORCA_INSTALL_LOG_LEVEL env var  >  INFO (default)

Installer progress is user-facing, so the default console level is
INFO and its lines carry a short program prefix instead of timestamps.

Optional file output via ORCA_INSTALL_LOG_FILE / ORCA_INSTALL_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import logging
import sys

DEFAULT_PREFIX = "orca-install"

# ── Format strings ──────────────────────────────────────────────

# INFO and above — "<prefix> info <message>"
_FMT_USER = "{prefix} %(levelname_lower)s %(message)s"

# DEBUG level — full diagnostic with file:line
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

# File output — always full detail
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"


class _PrefixFormatter(logging.Formatter):
    """Formatter exposing ``levelname_lower`` (``info``, ``error``...)."""

    def format(self, record: logging.LogRecord) -> str:
        record.levelname_lower = record.levelname.lower()
        return super().format(record)


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    log_file_level: str | None = None,
    prefix: str = DEFAULT_PREFIX,
) -> None:
    """Configure Python logging for the entire process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Optional separate level for the log file.
            Defaults to the same as ``level``.
        prefix: Program name printed in front of user-facing lines.
    """
    numeric_level = _parse_level(level)

    # ── Console handler (stderr) ────────────────────────────────
    if numeric_level <= logging.DEBUG:
        formatter: logging.Formatter = logging.Formatter(_FMT_DEBUG, datefmt=_DATEFMT_DEBUG)
    else:
        safe_prefix = prefix.replace("%", "%%")
        formatter = _PrefixFormatter(_FMT_USER.format(prefix=safe_prefix))

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(formatter)

    # ── Root logger ─────────────────────────────────────────────
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    # Effective root level = minimum of console and file levels
    effective_level = numeric_level

    # ── File handler (optional) ─────────────────────────────────
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)

    # Don't propagate exceptions from logging itself
    logging.raiseExceptions = False


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.INFO
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.INFO
    return numeric
