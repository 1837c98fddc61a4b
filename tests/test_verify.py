"""
Tests for the integrity verifier — manifest parsing and SHA-256 checks.
"""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from orca_installer.core.errors import ChecksumMismatchError, ChecksumMissingError
from orca_installer.core.services.release_install.domain.manifest import parse_manifest
from orca_installer.core.services.release_install.execution.verify import sha256_file, verify

ARCHIVE = "foo.tar.gz"
CONTENT = b"release archive bytes\n" * 512


def _flip(hex_digest: str, index: int = 0) -> str:
    ch = hex_digest[index]
    replacement = "0" if ch != "0" else "1"
    return hex_digest[:index] + replacement + hex_digest[index + 1:]


@pytest.fixture
def archive(tmp_path: Path) -> Path:
    path = tmp_path / ARCHIVE
    path.write_bytes(CONTENT)
    return path


@pytest.fixture
def digest() -> str:
    return hashlib.sha256(CONTENT).hexdigest()


def _manifest(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "checksums.txt"
    path.write_text(text)
    return path


class TestParseManifest:
    def test_order_and_fields(self):
        m = parse_manifest("aa11  one.tar.gz\nBB22\ttwo.zip\n")
        assert m.filenames() == ["one.tar.gz", "two.zip"]
        assert m.lookup("two.zip").digest == "bb22"

    def test_skips_blank_comment_and_malformed_lines(self):
        m = parse_manifest("\n# comment\nnot-a-hash file\nonlyonefield\nabcd  ok.tgz\n")
        assert m.filenames() == ["ok.tgz"]

    def test_binary_marker_and_dot_slash(self):
        m = parse_manifest("abcd *bin.zip\nef01  ./rel.tar\n")
        assert m.filenames() == ["bin.zip", "rel.tar"]

    def test_lookup_is_exact(self):
        m = parse_manifest("abcd  foo.tar.gz.sig\nef01  xfoo.tar.gz\n")
        assert m.lookup("foo.tar.gz") is None
        assert m.lookup("foo.tar") is None


class TestVerify:
    def test_exact_match(self, tmp_path: Path, archive: Path, digest: str):
        manifest = _manifest(tmp_path, f"{digest}  {ARCHIVE}\n")
        assert verify(archive, manifest) == digest

    def test_tab_separated_and_uppercase(self, tmp_path: Path, archive: Path, digest: str):
        manifest = _manifest(tmp_path, f"{digest.upper()}\t{ARCHIVE}\n")
        assert verify(archive, manifest) == digest

    def test_finds_record_among_others(self, tmp_path: Path, archive: Path, digest: str):
        text = (
            f"{'0' * 64}  orca-cli_1.2.3_darwin_arm64.tar.gz\n"
            f"{digest}  {ARCHIVE}\n"
            f"{'1' * 64}  orca-cli_1.2.3_linux_arm64.tar.gz\n"
        )
        assert verify(archive, _manifest(tmp_path, text)) == digest

    @pytest.mark.parametrize("index", [0, 17, 63])
    def test_single_hex_change_is_mismatch(
        self, tmp_path: Path, archive: Path, digest: str, index: int,
    ):
        manifest = _manifest(tmp_path, f"{_flip(digest, index)}  {ARCHIVE}\n")
        with pytest.raises(ChecksumMismatchError) as exc_info:
            verify(archive, manifest)
        assert exc_info.value.actual == digest

    def test_modified_file_is_mismatch(self, tmp_path: Path, archive: Path, digest: str):
        manifest = _manifest(tmp_path, f"{digest}  {ARCHIVE}\n")
        archive.write_bytes(CONTENT + b"tampered")
        with pytest.raises(ChecksumMismatchError):
            verify(archive, manifest)

    def test_missing_record(self, tmp_path: Path, archive: Path, digest: str):
        manifest = _manifest(
            tmp_path,
            f"{digest}  bar.tar.gz\n{digest}  foo.zip\n",
        )
        with pytest.raises(ChecksumMissingError, match=ARCHIVE):
            verify(archive, manifest)

    def test_substring_is_not_a_match(self, tmp_path: Path, archive: Path, digest: str):
        manifest = _manifest(tmp_path, f"{digest}  prefix-{ARCHIVE}\n")
        with pytest.raises(ChecksumMissingError):
            verify(archive, manifest)

    def test_empty_manifest(self, tmp_path: Path, archive: Path):
        with pytest.raises(ChecksumMissingError):
            verify(archive, _manifest(tmp_path, ""))


class TestSha256File:
    def test_matches_hashlib(self, archive: Path, digest: str):
        assert sha256_file(archive) == digest

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "empty"
        path.write_bytes(b"")
        assert sha256_file(path) == hashlib.sha256(b"").hexdigest()
