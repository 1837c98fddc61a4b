"""
L4 Execution — HTTP downloads.

The single place where the installer talks to the network.  Anything
other than a clean HTTP 200 is a ``DownloadError``; files are written
to a sibling temp name and renamed into place, so a failed download
never leaves a truncated file at the destination.
"""

from __future__ import annotations

import http.client
import logging
import os
import tempfile
import urllib.error
import urllib.request
from collections.abc import Mapping
from pathlib import Path

from orca_installer.core.errors import DownloadError
from orca_installer.core.services.release_install.data.constants import DEFAULT_TIMEOUT
from orca_installer.core.services.release_install.domain.download_helpers import (
    _fmt_size,
    _progress_step,
)

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "orca-installer/1.0"
_CHUNK_SIZE = 64 * 1024

# Accept header used when asking the release host for JSON metadata.
ACCEPT_JSON = {"Accept": "application/json"}


def _build_request(url: str, headers: Mapping[str, str] | None) -> urllib.request.Request:
    merged = {"User-Agent": DEFAULT_USER_AGENT}
    if headers:
        merged.update(headers)
    return urllib.request.Request(url, headers=merged)


def _open(url: str, headers: Mapping[str, str] | None, timeout: int):
    """Open ``url`` and return the response, raising DownloadError on failure."""
    logger.debug("http_download URL: %s", url)
    try:
        req = _build_request(url, headers)
        resp = urllib.request.urlopen(req, timeout=timeout)
    except urllib.error.HTTPError as exc:
        logger.debug("http_download received HTTP status %s", exc.code)
        exc.close()
        raise DownloadError(
            f"Download failed for {url}: HTTP {exc.code}", url=url, status=exc.code,
        ) from exc
    except (urllib.error.URLError, OSError, http.client.HTTPException, ValueError) as exc:
        reason = getattr(exc, "reason", exc)
        raise DownloadError(f"Download failed for {url}: {reason}", url=url) from exc

    status = resp.getcode()
    if status != 200:
        resp.close()
        logger.debug("http_download received HTTP status %s", status)
        raise DownloadError(
            f"Download failed for {url}: HTTP {status}", url=url, status=status,
        )
    return resp


def fetch(
    url: str,
    destination: Path,
    headers: Mapping[str, str] | None = None,
    *,
    timeout: int = DEFAULT_TIMEOUT,
) -> Path:
    """Download ``url`` to ``destination``.

    The body is streamed to a temp file in the destination directory and
    renamed over ``destination`` only after the whole body arrived.

    Args:
        url: Resource to download.
        destination: Final path of the downloaded file.
        headers: Extra request headers (e.g. ``ACCEPT_JSON``).
        timeout: Socket timeout in seconds.

    Returns:
        ``destination``.

    Raises:
        DownloadError: On transport errors, timeouts or a non-200 status.
    """
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{destination.name}.", suffix=".part", dir=destination.parent,
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as out, _open(url, headers, timeout) as resp:
            total = int(resp.headers.get("Content-Length") or 0)
            downloaded = 0
            last_pct = 0
            while True:
                try:
                    chunk = resp.read(_CHUNK_SIZE)
                except (OSError, http.client.HTTPException) as exc:
                    raise DownloadError(
                        f"Download interrupted for {url}: {exc}", url=url,
                    ) from exc
                if not chunk:
                    break
                out.write(chunk)
                downloaded += len(chunk)

                pct = _progress_step(downloaded, total, last_pct)
                if pct is not None:
                    last_pct = pct
                    logger.debug(
                        "Download progress: %d%% (%s / %s)",
                        pct, _fmt_size(downloaded), _fmt_size(total),
                    )

        if total and downloaded != total:
            raise DownloadError(
                f"Download truncated for {url}: got {downloaded} of {total} bytes",
                url=url,
            )

        os.replace(tmp_path, destination)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise

    logger.debug("Downloaded %s → %s (%s)", url, destination, _fmt_size(downloaded))
    return destination


def fetch_text(
    url: str,
    headers: Mapping[str, str] | None = None,
    *,
    timeout: int = DEFAULT_TIMEOUT,
) -> str:
    """Download ``url`` and return the body decoded as UTF-8.

    Raises:
        DownloadError: On transport errors, timeouts or a non-200 status.
    """
    with _open(url, headers, timeout) as resp:
        try:
            body = resp.read()
        except (OSError, http.client.HTTPException) as exc:
            raise DownloadError(f"Download interrupted for {url}: {exc}", url=url) from exc
    return body.decode("utf-8", errors="replace")
