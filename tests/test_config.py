"""
Tests for the settings loader and the config check use case.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from orca_installer.core.config.loader import (
    SETTINGS_FILE,
    ConfigError,
    find_settings_file,
    load_settings,
)
from orca_installer.core.models.settings import InstallerSettings
from orca_installer.core.use_cases.config_check import check_config


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


class TestFindSettingsFile:
    def test_found_in_start_dir(self, tmp_path: Path):
        cfg = _write(tmp_path / SETTINGS_FILE, "project_name: x\n")
        assert find_settings_file(tmp_path) == cfg.resolve()

    def test_walks_up(self, tmp_path: Path):
        cfg = _write(tmp_path / SETTINGS_FILE, "")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_settings_file(nested) == cfg.resolve()

    def test_not_found(self, tmp_path: Path):
        assert find_settings_file(tmp_path) is None


class TestLoadSettings:
    def test_defaults_when_no_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        settings = load_settings()
        assert settings == InstallerSettings()
        assert settings.owner_repo == "orcasecurity/orca-cli"
        assert settings.default_bin_dir == "/usr/local/bin"

    def test_flat_file(self, tmp_path: Path):
        cfg = _write(tmp_path / SETTINGS_FILE, (
            "project_name: tool\n"
            "owner: acme\n"
            "repo: tool-cli\n"
            "binary_name: tool\n"
            "supported_platforms: [linux/amd64, freebsd/amd64]\n"
            "timeout: 5\n"
        ))
        settings = load_settings(cfg)
        assert settings.owner_repo == "acme/tool-cli"
        assert settings.supported_platforms == ("linux/amd64", "freebsd/amd64")
        assert settings.timeout == 5

    def test_installer_wrapper_key(self, tmp_path: Path):
        cfg = _write(tmp_path / SETTINGS_FILE, "installer:\n  owner: acme\n")
        assert load_settings(cfg).owner == "acme"

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        cfg = _write(tmp_path / SETTINGS_FILE, "")
        assert load_settings(cfg) == InstallerSettings()

    def test_hosts_lose_trailing_slash(self, tmp_path: Path):
        cfg = _write(tmp_path / SETTINGS_FILE, "release_host: https://mirror.test/\n")
        assert load_settings(cfg).release_host == "https://mirror.test"

    def test_search_from_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        _write(tmp_path / SETTINGS_FILE, "owner: found\n")
        monkeypatch.chdir(tmp_path)
        assert load_settings().owner == "found"

    def test_explicit_path_missing(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "nope.yml")

    @pytest.mark.parametrize("text, message", [
        ("owner: [unclosed\n", "Invalid YAML"),
        ("- a\n- b\n", "Expected a YAML mapping"),
        ("installer: 3\n", "'installer' to be a mapping"),
        ("timeout: 0\n", "Invalid installer settings"),
        ("supported_platforms: [linux]\n", "Invalid installer settings"),
        ("unknown_key: 1\n", "Invalid installer settings"),
    ])
    def test_invalid(self, tmp_path: Path, text: str, message: str):
        cfg = _write(tmp_path / SETTINGS_FILE, text)
        with pytest.raises(ConfigError, match=message):
            load_settings(cfg)


class TestCheckConfig:
    def test_missing_file_is_a_warning(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        result = check_config()
        assert result.valid
        assert result.config_path is None
        assert any("built-in defaults" in w for w in result.warnings)

    def test_valid_file(self, tmp_path: Path):
        cfg = _write(tmp_path / SETTINGS_FILE, "owner: acme\n")
        result = check_config(cfg)
        assert result.valid
        assert result.warnings == []
        assert result.to_dict()["repository"] == "acme/orca-cli"

    def test_unknown_platform_entries(self, tmp_path: Path):
        cfg = _write(tmp_path / SETTINGS_FILE, "supported_platforms: [beos/amd64, linux/vax]\n")
        result = check_config(cfg)
        assert not result.valid
        assert any("Unknown OS 'beos'" in e for e in result.errors)
        assert any("Unknown architecture 'vax'" in e for e in result.errors)

    def test_duplicates_warn(self, tmp_path: Path):
        cfg = _write(tmp_path / SETTINGS_FILE, "supported_platforms: [linux/amd64, linux/amd64]\n")
        result = check_config(cfg)
        assert result.valid
        assert any("Duplicate" in w for w in result.warnings)

    def test_host_scheme(self, tmp_path: Path):
        cfg = _write(tmp_path / SETTINGS_FILE, (
            "release_host: ftp://example.test\n"
            "download_host: http://example.test\n"
        ))
        result = check_config(cfg)
        assert not result.valid
        assert any("release_host must be an http(s) URL" in e for e in result.errors)
        assert any("download_host uses plain http" in w for w in result.warnings)

    def test_load_error_is_reported(self, tmp_path: Path):
        cfg = _write(tmp_path / SETTINGS_FILE, "timeout: -1\n")
        result = check_config(cfg)
        assert not result.valid
        assert result.settings is None
        assert result.errors
