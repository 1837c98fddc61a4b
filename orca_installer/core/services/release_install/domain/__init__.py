"""
L1 Domain — pure functions, no I/O.

Asset naming, manifest parsing and size formatting.
"""

from orca_installer.core.services.release_install.domain.assets import (  # noqa: F401
    archive_asset,
    archive_name,
    binary_filename,
    checksum_asset,
    checksum_name,
    release_metadata_url,
    version_from_tag,
)
from orca_installer.core.services.release_install.domain.download_helpers import (  # noqa: F401
    _fmt_size,
    _progress_step,
)
from orca_installer.core.services.release_install.domain.manifest import (  # noqa: F401
    parse_manifest,
)
