"""
orca-installer — fetch, verify and install a release binary.

Resolves a release tag on the release host, downloads the platform
archive and its checksum manifest, verifies the archive, and installs
the single binary it contains into a target directory.
"""

__version__ = "0.1.0"
