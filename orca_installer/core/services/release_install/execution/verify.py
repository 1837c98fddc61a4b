"""
L4 Execution — Archive integrity verification.

Hashes a downloaded file and checks it against its record in the
release's checksum manifest.  This is the gate in front of extraction:
nothing is unpacked or installed unless the digests match exactly.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from orca_installer.core.errors import ChecksumMismatchError, ChecksumMissingError
from orca_installer.core.models.manifest import ChecksumManifest
from orca_installer.core.services.release_install.domain.manifest import parse_manifest

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


def sha256_file(path: Path) -> str:
    """Return the lowercase hex SHA-256 of ``path``, read in chunks."""
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()


def load_manifest(manifest_path: Path) -> ChecksumManifest:
    """Read and parse a checksum manifest file."""
    text = Path(manifest_path).read_text(encoding="utf-8", errors="replace")
    return parse_manifest(text)


def expected_digest(file_path: Path, manifest: ChecksumManifest, *, source: str = "") -> str:
    """Return the manifest digest for ``file_path``'s basename.

    Raises:
        ChecksumMissingError: If no record has exactly that filename.
    """
    basename = Path(file_path).name
    record = manifest.lookup(basename)
    if record is None:
        where = f" in '{source}'" if source else ""
        raise ChecksumMissingError(
            f"Unable to find checksum for '{basename}'{where}"
        )
    return record.digest


def verify(file_path: Path, manifest_path: Path) -> str:
    """Verify ``file_path`` against the checksum manifest at ``manifest_path``.

    Args:
        file_path: The downloaded archive.
        manifest_path: The ``*_checksums.txt`` published with it.

    Returns:
        The verified SHA-256 hex digest.

    Raises:
        ChecksumMissingError: The manifest has no record for the basename.
        ChecksumMismatchError: The computed digest differs from the record.
    """
    file_path = Path(file_path)
    manifest = load_manifest(manifest_path)
    want = expected_digest(file_path, manifest, source=str(manifest_path))

    got = sha256_file(file_path)
    if got != want.lower():
        raise ChecksumMismatchError(
            f"Checksum for '{file_path.name}' did not verify: "
            f"expected {want}, got {got}",
            expected=want,
            actual=got,
        )

    logger.debug("Checksum verified for %s (sha256:%s)", file_path.name, got)
    return got
