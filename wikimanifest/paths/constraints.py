"""
Applicability inference for wiki paths.

A `{{Game data/saves|System|Path}}` row restricts its path either through
the System column ("Windows", "Steam", "Microsoft Store", ...) or through
the placeholders used in the path itself (`{{P|steam}}` implies Steam,
`{{P|appdata}}` implies Windows).
"""

from typing import Optional

from ..enums import Os, Store
from ..errors import UnsupportedOsError
from ..models import Constraint
from .arguments import PATH_ARGUMENTS
from .resolver import path_contains_argument


# System column values naming an OS
OS_NAMES: dict[str, Os] = {
    "Windows": Os.WINDOWS,
    "OS X": Os.MAC,
    "Linux": Os.LINUX,
    "DOS": Os.DOS,
}

# Checked in order; a System value naming a store is matched by substring.
STORE_PATTERNS: tuple[tuple[str, Constraint], ...] = (
    ("steam", Constraint(store=Store.STEAM)),
    # Microsoft Store only ships Windows builds
    ("microsoft store", Constraint(os=Os.WINDOWS, store=Store.MICROSOFT)),
    ("gog.com", Constraint(store=Store.GOG)),
    ("epic games", Constraint(store=Store.EPIC)),
    ("uplay", Constraint(store=Store.UPLAY)),
)


def parse_os(system: str) -> Os:
    """Map a System column value to an OS.

    Raises:
        UnsupportedOsError: For anything outside OS_NAMES
    """
    try:
        return OS_NAMES[system]
    except KeyError:
        raise UnsupportedOsError(f"Unsupported OS: {system}") from None


def os_from_path(raw_path: str) -> Optional[Os]:
    """OS implied by the first placeholder in the path that implies one."""
    for arg in PATH_ARGUMENTS:
        if arg.when and arg.when.os and path_contains_argument(raw_path, arg):
            return arg.when.os
    return None


def store_from_path(raw_path: str) -> Optional[Store]:
    """Store implied by the first placeholder in the path that implies one."""
    for arg in PATH_ARGUMENTS:
        if arg.when and arg.when.store and path_contains_argument(raw_path, arg):
            return arg.when.store
    return None


def constraint_from_path(raw_path: str) -> Constraint:
    return Constraint(os=os_from_path(raw_path), store=store_from_path(raw_path))


def constraint_from_system(system: str, raw_path: str) -> Constraint:
    """
    Derive the constraint for a file path from its System column.

    A store name wins over everything else. Otherwise the column must name
    an OS, and the store (if any) comes from the path's placeholders. A
    blank column leaves both axes to the path instead of being rejected
    as an unknown OS, so rows that omit the System value still count.

    Raises:
        UnsupportedOsError: The column names neither a store nor a known OS
    """
    system = system.strip()
    if not system:
        return constraint_from_path(raw_path)

    lowered = system.lower()
    for pattern, constraint in STORE_PATTERNS:
        if pattern in lowered:
            return constraint

    return Constraint(os=parse_os(system), store=store_from_path(raw_path))
