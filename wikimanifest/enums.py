"""
Canonical string enumerations for wikimanifest.

StrEnum values serialize as plain strings, so they drop straight into
YAML manifests and cache files without custom representers.
"""

from enum import StrEnum


# ── Applicability ──────────────────────────────────────────────────────

class Os(StrEnum):
    """Operating systems a path can be restricted to."""
    WINDOWS = "windows"
    MAC = "mac"
    LINUX = "linux"
    DOS = "dos"


class Store(StrEnum):
    """Storefronts a path can be restricted to."""
    STEAM = "steam"
    GOG = "gog"
    EPIC = "epic"
    UPLAY = "uplay"
    MICROSOFT = "microsoft"


# ── Path Classification ────────────────────────────────────────────────

class Tag(StrEnum):
    """Semantic category a path was declared under on the wiki."""
    SAVE = "save"
    CONFIG = "config"


class PathType(StrEnum):
    """Where a resolved path lives."""
    FILE_SYSTEM = "filesystem"
    REGISTRY = "registry"


# ── Failures ───────────────────────────────────────────────────────────

class ErrorKind(StrEnum):
    """Discriminant for per-template extraction failures."""
    UNSUPPORTED_OS = "unsupported_os"
    UNSUPPORTED_PATH = "unsupported_path"
    OTHER = "other"
