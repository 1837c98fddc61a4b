"""
L5 Orchestration — the end-to-end install pipeline.
"""

from orca_installer.core.services.release_install.orchestration.orchestrator import (  # noqa: F401
    build_plan,
    detect_platform,
    run_install,
)
