"""
Installer error taxonomy.

Every failure the pipeline can hit is one of these.  They are all
terminal: lower layers raise, the install use case catches
``InstallerError`` and turns it into a failed result, and the CLI
prints the message and exits non-zero.
"""

from __future__ import annotations


class InstallerError(Exception):
    """Base class for every pipeline failure."""


class UnsupportedPlatformError(InstallerError):
    """Raised when the host OS/arch is unknown or not in the allowlist."""


class ResolutionError(InstallerError):
    """Raised when a requested tag cannot be resolved to a concrete release."""


class DownloadError(InstallerError):
    """Raised when a transfer fails or the response status is not 200."""

    def __init__(self, message: str, *, url: str = "", status: int | None = None):
        super().__init__(message)
        self.url = url
        self.status = status


class ChecksumMissingError(InstallerError):
    """Raised when the manifest has no record for the file's basename."""


class ChecksumMismatchError(InstallerError):
    """Raised when the computed SHA-256 differs from the manifest value."""

    def __init__(self, message: str, *, expected: str = "", actual: str = ""):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class UnsupportedFormatError(InstallerError):
    """Raised for archive extensions we cannot extract."""


class BinaryNotFoundError(InstallerError):
    """Raised when the extracted archive does not contain the binary."""


class InstallPermissionError(InstallerError, PermissionError):
    """Raised when the target directory is not writable, even after sudo."""
