"""
L2 Resolver — Release tag resolution.

Turns what the user asked for (a tag, or nothing) into a concrete,
immutable release tag by asking the release host.  Everything after
this point builds URLs from the concrete tag, never from ``latest``,
so the assets fetched all belong to the same release even if a new
one is published mid-install.
"""

from __future__ import annotations

import json
import logging

from orca_installer.core.errors import DownloadError, ResolutionError
from orca_installer.core.models.release import ReleaseTag
from orca_installer.core.models.settings import InstallerSettings
from orca_installer.core.services.release_install.data.constants import LATEST_TAG
from orca_installer.core.services.release_install.domain.assets import (
    release_metadata_url,
    version_from_tag,
)
from orca_installer.core.services.release_install.execution.download import (
    ACCEPT_JSON,
    fetch_text,
)

logger = logging.getLogger(__name__)


def _extract_tag_name(body: str) -> str:
    """Pull ``tag_name`` out of a release metadata document.

    Returns an empty string when the body is not a JSON object or the
    field is missing or not a string.
    """
    try:
        data = json.loads(body)
    except ValueError:
        return ""
    if not isinstance(data, dict):
        return ""
    tag = data.get("tag_name")
    return tag.strip() if isinstance(tag, str) else ""


def resolve(
    owner_repo: str,
    requested_tag: str = "",
    *,
    settings: InstallerSettings | None = None,
) -> ReleaseTag:
    """Resolve ``requested_tag`` (or ``latest``) to a concrete release tag.

    Args:
        owner_repo: ``owner/repo`` on the release host.
        requested_tag: A tag such as ``v1.2.3``.  Empty means ``latest``.
        settings: Hosts, timeout and user agent; defaults to the
            built-in settings.

    Returns:
        The concrete tag and the version derived from it.

    Raises:
        ResolutionError: The lookup failed or returned no tag.
    """
    settings = settings or InstallerSettings()
    owner, _, repo = owner_repo.partition("/")
    if owner and repo and (owner, repo) != (settings.owner, settings.repo):
        settings = settings.model_copy(update={"owner": owner, "repo": repo})

    tag = requested_tag.strip() or LATEST_TAG
    if tag == LATEST_TAG:
        logger.info("Checking %s for latest tag.", settings.release_host)
    else:
        logger.info("Checking %s for tag '%s'", settings.release_host, tag)

    url = release_metadata_url(settings, tag)
    headers = {**ACCEPT_JSON, "User-Agent": settings.user_agent}
    try:
        body = fetch_text(url, headers, timeout=settings.timeout)
    except DownloadError as exc:
        raise ResolutionError(
            f"Unable to find '{tag}' - use 'latest' or see "
            f"{settings.releases_page} for details ({exc})"
        ) from exc

    concrete = _extract_tag_name(body)
    if not concrete or concrete == LATEST_TAG:
        raise ResolutionError(
            f"Unable to find '{tag}' - use 'latest' or see "
            f"{settings.releases_page} for details (no tag_name in response)"
        )

    release = ReleaseTag(tag=concrete, version=version_from_tag(concrete))
    logger.info("Resolved release tag %s (version %s)", release.tag, release.version)
    return release
