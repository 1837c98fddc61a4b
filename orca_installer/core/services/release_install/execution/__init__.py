"""
L4 Execution — ``__init__.py`` re-exports all execution functions.

These functions WRITE to the system: network downloads, temp
directories, archive extraction, and the final binary copy.
"""

from orca_installer.core.services.release_install.execution.archive import (  # noqa: F401
    ArchiveFormat,
    extract,
)
from orca_installer.core.services.release_install.execution.download import (  # noqa: F401
    ACCEPT_JSON,
    fetch,
    fetch_text,
)
from orca_installer.core.services.release_install.execution.install import (  # noqa: F401
    install,
    install_binary,
)
from orca_installer.core.services.release_install.execution.subprocess_runner import (  # noqa: F401
    _run_subprocess,
    sudo_available,
)
from orca_installer.core.services.release_install.execution.verify import (  # noqa: F401
    expected_digest,
    load_manifest,
    sha256_file,
    verify,
)
from orca_installer.core.services.release_install.execution.workspace import (  # noqa: F401
    scratch_workspace,
)
