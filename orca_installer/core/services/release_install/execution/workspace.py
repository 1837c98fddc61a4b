"""
L4 Execution — Scratch workspace.

Every install attempt owns one temporary directory.  Downloads and
extracted files live there and nowhere else; the directory is removed
when the attempt ends, whether it succeeded or failed.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)

_PREFIX = "orca-install-"


@contextmanager
def scratch_workspace(root: Path | None = None) -> Iterator[Path]:
    """Create a private temp directory and remove it on exit.

    Args:
        root: Parent directory for the workspace.  Defaults to the
            system temp dir, which honours ``TMPDIR``.

    Yields:
        Path of the new, empty workspace.
    """
    if root is not None:
        Path(root).mkdir(parents=True, exist_ok=True)
    path = Path(tempfile.mkdtemp(prefix=_PREFIX, dir=root))
    logger.debug("downloading files into %s", path)
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
        if path.exists():
            logger.warning("Could not fully remove scratch directory %s", path)
        else:
            logger.debug("Removed scratch directory %s", path)
