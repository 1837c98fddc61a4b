"""
Settings loader — reads orca-install.yml into InstallerSettings.

The settings file is optional.  When none is found the built-in
defaults (orca-cli on GitHub) are used.  When one is given it is read
as YAML, validated against the Pydantic schema, and returned as a
typed, immutable settings object.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from orca_installer.core.models.settings import InstallerSettings

logger = logging.getLogger(__name__)

# Default settings filename
SETTINGS_FILE = "orca-install.yml"


class ConfigError(Exception):
    """Raised when installer settings are invalid or unreadable."""


def find_settings_file(start_dir: Path | None = None) -> Path | None:
    """Search for orca-install.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to orca-install.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SETTINGS_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None, *, search: bool = True) -> InstallerSettings:
    """Load and validate installer settings.

    Args:
        path: Explicit path to a settings file.  If None and ``search``
            is set, searches upward from the CWD.
        search: Whether to search for a settings file when ``path`` is None.

    Returns:
        Validated InstallerSettings.  Defaults when no file is found.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None and search:
        path = find_settings_file()

    if path is None:
        logger.debug("No %s found — using built-in defaults", SETTINGS_FILE)
        return InstallerSettings()

    if not path.is_file():
        raise ConfigError(f"Settings file not found: {path}")

    logger.debug("Loading installer settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under an "installer" key or be flat
    settings_data = data.get("installer", data)
    if not isinstance(settings_data, dict):
        raise ConfigError(f"Expected 'installer' to be a mapping in {path}")

    try:
        settings = InstallerSettings.model_validate(settings_data)
    except Exception as e:
        raise ConfigError(f"Invalid installer settings: {e}") from e

    logger.debug(
        "Loaded settings for '%s' (%s)", settings.project_name, settings.owner_repo,
    )
    return settings
