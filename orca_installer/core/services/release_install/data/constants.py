"""
L0 Data — Platform tables and release-host defaults.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

# OS names produced by ``platform.system().lower()`` (or ``uname -s``)
# that are Windows in disguise.  Matched by prefix.
_WINDOWS_OS_PREFIXES: tuple[str, ...] = ("cygwin_nt", "mingw", "msys_nt")

# Architecture name normalization to Go-style GOARCH names.
#
# Release archives are named after GOARCH values (amd64/arm64/386), while
# the host reports raw ``uname -m`` strings (x86_64/aarch64/i686).  The
# ``armvN*`` families are matched by prefix in the detector, not here.
_IARCH_MAP: dict[str, str] = {
    "x86_64": "amd64",
    "amd64": "amd64",      # Windows reports AMD64
    "x86": "386",
    "i386": "386",
    "i686": "386",
    "aarch64": "arm64",
    "arm64": "arm64",      # macOS (Darwin reports arm64)
}

_ARM_PREFIXES: tuple[str, ...] = ("armv5", "armv6", "armv7")

# Every GOOS value a release could be built for.
KNOWN_OS: frozenset[str] = frozenset({
    "darwin",
    "dragonfly",
    "freebsd",
    "linux",
    "android",
    "nacl",
    "netbsd",
    "openbsd",
    "plan9",
    "solaris",
    "windows",
})

# Every GOARCH value a release could be built for.
KNOWN_ARCH: frozenset[str] = frozenset({
    "386",
    "amd64",
    "arm64",
    "armv5",
    "armv6",
    "armv7",
    "ppc64",
    "ppc64le",
    "mips",
    "mipsle",
    "mips64",
    "mips64le",
    "s390x",
    "amd64p32",
})

# Platforms the release pipeline actually publishes archives for.
DEFAULT_SUPPORTED_PLATFORMS: tuple[str, ...] = (
    "darwin/amd64",
    "darwin/arm64",
    "linux/amd64",
    "linux/arm64",
)

# ── Release host defaults ──────────────────────────────────────

DEFAULT_PROJECT_NAME = "orca-cli"
DEFAULT_OWNER = "orcasecurity"
DEFAULT_REPO = "orca-cli"
DEFAULT_RELEASE_HOST = "https://github.com"
DEFAULT_DOWNLOAD_HOST = "https://github.com"
DEFAULT_BIN_DIR = "/usr/local/bin"
DEFAULT_TIMEOUT = 30

LATEST_TAG = "latest"
CHECKSUM_SUFFIX = "checksums.txt"
