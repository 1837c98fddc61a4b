"""
L2 Resolver — turn a requested tag into a concrete release.
"""

from orca_installer.core.services.release_install.resolver.release import (  # noqa: F401
    resolve,
)
