"""
Checksum manifest model — the ``*_checksums.txt`` published with a release.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ChecksumRecord(BaseModel):
    """One ``<hex-digest> <filename>`` line of a manifest."""

    model_config = ConfigDict(frozen=True)

    filename: str
    digest: str


class ChecksumManifest(BaseModel):
    """Ordered checksum records, looked up by exact filename."""

    records: list[ChecksumRecord] = Field(default_factory=list)

    def lookup(self, filename: str) -> ChecksumRecord | None:
        """Return the first record whose filename equals ``filename``."""
        for record in self.records:
            if record.filename == filename:
                return record
        return None

    def filenames(self) -> list[str]:
        return [r.filename for r in self.records]

    def __len__(self) -> int:
        return len(self.records)
