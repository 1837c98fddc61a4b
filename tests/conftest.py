"""
Shared test fixtures and configuration.
"""

from __future__ import annotations

import hashlib
import http.server
import io
import json
import logging
import tarfile
import threading
import zipfile
from collections.abc import Callable, Iterator
from email.message import Message
from pathlib import Path

import pytest

from orca_installer.core.models.settings import InstallerSettings


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep proxies, env overrides and logging changes out of every test."""
    for var in (
        "http_proxy", "HTTP_PROXY", "https_proxy", "HTTPS_PROXY", "all_proxy", "ALL_PROXY",
        "BINDIR", "ORCA_INSTALL_CONFIG", "ORCA_INSTALL_TMPDIR",
        "ORCA_INSTALL_LOG_LEVEL", "ORCA_INSTALL_LOG_FILE", "ORCA_INSTALL_LOG_FILE_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")

    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


# ── Archives ─────────────────────────────────────────────────────


def build_archive(path: Path, files: dict[str, bytes]) -> Path:
    """Write ``files`` into an archive whose format follows ``path``'s suffix."""
    path.parent.mkdir(parents=True, exist_ok=True)
    name = path.name
    if name.endswith(".zip"):
        with zipfile.ZipFile(path, "w") as zf:
            for member, data in files.items():
                zf.writestr(member, data)
        return path

    mode = "w:gz" if name.endswith((".tar.gz", ".tgz")) else "w"
    with tarfile.open(path, mode) as tf:
        for member, data in files.items():
            info = tarfile.TarInfo(member)
            info.size = len(data)
            info.mode = 0o755
            tf.addfile(info, io.BytesIO(data))
    return path


@pytest.fixture
def make_archive() -> Callable[[Path, dict[str, bytes]], Path]:
    """Factory fixture: ``make_archive(path, {"name": b"bytes"})``."""
    return build_archive


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


# ── Local release host ──────────────────────────────────────────


class _ReleaseHandler(http.server.BaseHTTPRequestHandler):
    """Serves the routes registered on the server; 404 for anything else."""

    def do_GET(self) -> None:  # noqa: N802
        self.server.requests.append((self.path, self.headers))
        route = self.server.routes.get(self.path)
        if route is None:
            self.send_response(404)
            self.send_header("Content-Length", "0")
            self.end_headers()
            return
        status, body = route
        self.send_response(status)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args) -> None:  # noqa: A002
        pass


class ReleaseHost:
    """A running local HTTP server plus helpers to publish fake releases."""

    def __init__(self, server: http.server.ThreadingHTTPServer):
        self._server = server
        self.url = f"http://127.0.0.1:{server.server_address[1]}"

    @property
    def routes(self) -> dict[str, tuple[int, bytes]]:
        return self._server.routes

    @property
    def requests(self) -> list[tuple[str, Message]]:
        return self._server.requests

    def paths(self) -> list[str]:
        return [p for p, _ in self.requests]

    def serve(self, path: str, body: bytes | str, status: int = 200) -> None:
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.routes[path] = (status, body)

    def settings(self, **overrides) -> InstallerSettings:
        return InstallerSettings(
            release_host=self.url, download_host=self.url, **overrides,
        )

    def publish(
        self,
        tag: str,
        *,
        binary: bytes = b"#!/bin/sh\necho orca-cli\n",
        platform: str = "linux/amd64",
        project: str = "orca-cli",
        owner_repo: str = "orcasecurity/orca-cli",
        latest: bool = True,
        manifest: str | None = None,
    ) -> dict[str, object]:
        """Publish a release with one archive and a matching manifest."""
        os_name, arch = platform.split("/")
        version = tag[1:] if tag.startswith("v") else tag
        ext = "zip" if os_name == "windows" else "tar.gz"
        binary_name = project + (".exe" if os_name == "windows" else "")
        archive_name = f"{project}_{version}_{os_name}_{arch}.{ext}"
        checksum_name = f"{project}_{version}_checksums.txt"

        buf_path = Path(self._server.scratch) / archive_name
        build_archive(buf_path, {binary_name: binary, "README.md": b"readme\n"})
        archive_bytes = buf_path.read_bytes()

        if manifest is None:
            manifest = (
                f"{sha256_hex(b'other')}  {project}_{version}_darwin_arm64.tar.gz\n"
                f"{sha256_hex(archive_bytes)}  {archive_name}\n"
            )

        meta = json.dumps({"tag_name": tag, "name": tag})
        self.serve(f"/{owner_repo}/releases/{tag}", meta)
        if latest:
            self.serve(f"/{owner_repo}/releases/latest", meta)
        base = f"/{owner_repo}/releases/download/{tag}"
        self.serve(f"{base}/{archive_name}", archive_bytes)
        self.serve(f"{base}/{checksum_name}", manifest)

        return {
            "archive_name": archive_name,
            "archive_bytes": archive_bytes,
            "checksum_name": checksum_name,
            "binary_name": binary_name,
            "binary": binary,
        }


@pytest.fixture
def release_host(tmp_path_factory: pytest.TempPathFactory) -> Iterator[ReleaseHost]:
    """A local release host on an ephemeral port."""
    server = http.server.ThreadingHTTPServer(("127.0.0.1", 0), _ReleaseHandler)
    server.routes = {}
    server.requests = []
    server.scratch = str(tmp_path_factory.mktemp("published"))
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield ReleaseHost(server)
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)
