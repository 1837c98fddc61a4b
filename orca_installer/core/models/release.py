"""
Release models — resolved tags and the assets derived from them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class ReleaseTag(BaseModel):
    """A concrete release tag and the version string derived from it.

    ``tag`` is what the release host calls the release (``v1.2.3``);
    ``version`` is the tag without its leading ``v`` and is what the
    asset filenames are built from (``1.2.3``).
    """

    model_config = ConfigDict(frozen=True)

    tag: str
    version: str

    @field_validator("tag")
    @classmethod
    def _concrete(cls, value: str) -> str:
        if not value or value == "latest":
            raise ValueError("release tag must be a concrete tag, not an alias")
        return value


class ReleaseAsset(BaseModel):
    """A downloadable file attached to a release."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str
