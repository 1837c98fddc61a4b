"""
L4 Execution — Archive extraction.

Release archives come as gzip tarballs, plain tarballs or zips.  Each
format is a member of ``ArchiveFormat`` and knows how to unpack itself
into a directory.
"""

from __future__ import annotations

import enum
import gzip
import logging
import tarfile
import zipfile
import zlib
from pathlib import Path

from orca_installer.core.errors import UnsupportedFormatError

logger = logging.getLogger(__name__)


class ArchiveFormat(enum.Enum):
    """Supported archive formats, keyed by their filename suffixes."""

    TAR_GZ = (".tar.gz", ".tgz")
    TAR = (".tar",)
    ZIP = (".zip",)

    @property
    def suffixes(self) -> tuple[str, ...]:
        return self.value

    @classmethod
    def from_filename(cls, name: str | Path) -> ArchiveFormat:
        """Pick the format from a filename's extension.

        Raises:
            UnsupportedFormatError: For any other extension.
        """
        lowered = str(name).lower()
        for fmt in cls:
            if lowered.endswith(fmt.suffixes):
                return fmt
        raise UnsupportedFormatError(f"Unknown archive format for {Path(name).name}")

    def extract(self, archive: Path, dest: Path) -> Path:
        """Unpack ``archive`` into ``dest`` and return ``dest``.

        Members that would land outside ``dest`` (absolute paths, ``..``
        components, links pointing out) are refused.

        Raises:
            UnsupportedFormatError: If the file is not a valid archive
                of this format.
        """
        dest = Path(dest)
        dest.mkdir(parents=True, exist_ok=True)
        logger.debug("Extracting %s (%s) into %s", archive, self.name, dest)

        if self is ArchiveFormat.ZIP:
            _extract_zip(archive, dest)
        else:
            mode = "r:gz" if self is ArchiveFormat.TAR_GZ else "r:"
            _extract_tar(archive, dest, mode)
        return dest


def _extract_tar(archive: Path, dest: Path, mode: str) -> None:
    try:
        with tarfile.open(archive, mode) as tf:
            tf.extractall(dest, filter="data")
    except (tarfile.TarError, gzip.BadGzipFile, zlib.error, EOFError) as exc:
        raise UnsupportedFormatError(f"Cannot extract {archive.name}: {exc}") from exc


def _extract_zip(archive: Path, dest: Path) -> None:
    root = dest.resolve()
    try:
        with zipfile.ZipFile(archive, "r") as zf:
            for member in zf.namelist():
                target = (root / member).resolve()
                if not target.is_relative_to(root):
                    raise UnsupportedFormatError(
                        f"Refusing to extract {member!r} outside {dest}"
                    )
            zf.extractall(dest)
    except zipfile.BadZipFile as exc:
        raise UnsupportedFormatError(f"Cannot extract {archive.name}: {exc}") from exc


def extract(archive: Path, dest: Path) -> Path:
    """Extract ``archive`` into ``dest``, choosing the format by extension."""
    return ArchiveFormat.from_filename(archive).extract(Path(archive), dest)
