"""
L1 Domain — Checksum manifest parsing (pure).

Manifests are the ``sha256sum``-style listings published next to
release archives::

    3b1f...e0c2  orca-cli_1.2.3_linux_amd64.tar.gz
    9a07...41d8  orca-cli_1.2.3_darwin_arm64.tar.gz

Fields are separated by any run of spaces or tabs.  A leading ``*``
(binary-mode marker) or ``./`` on the filename is dropped so lookups
compare bare filenames.
"""

from __future__ import annotations

import logging
import re

from orca_installer.core.models.manifest import ChecksumManifest, ChecksumRecord

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


def _clean_filename(name: str) -> str:
    if name.startswith("*"):
        name = name[1:]
    if name.startswith("./"):
        name = name[2:]
    return name


def parse_manifest(text: str) -> ChecksumManifest:
    """Parse manifest text into ordered records.

    Lines that are blank, comments, or do not start with a hex digest
    are skipped.  Digests are stored lowercase.
    """
    records: list[ChecksumRecord] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        parts = stripped.split(None, 1)
        if len(parts) != 2 or not _HEX_RE.match(parts[0]):
            logger.debug("Skipping malformed manifest line %d: %r", lineno, line)
            continue
        digest, filename = parts
        records.append(
            ChecksumRecord(filename=_clean_filename(filename.strip()), digest=digest.lower())
        )
    return ChecksumManifest(records=records)
