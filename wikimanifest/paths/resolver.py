"""
Resolution of raw wiki path text into manifest paths.

The wiki writes paths like `{{P|appdata}}\\Studio\\Game` and we need
`<winAppData>/Studio/Game`. Substitution is textual: every known
{{P|token}} marker is replaced with its mapped variable until none are
left, then separators are normalized.
"""

import logging
import re
from functools import lru_cache
from typing import Iterable

from ..enums import PathType
from ..errors import UnsupportedPathError
from .arguments import MAPPED_VALUES, PATH_ARGUMENTS, PathArgument

logger = logging.getLogger(__name__)


# Upper bound on rewrite passes for a single token
MAX_SUBSTITUTION_PASSES = 100

# Resolved paths that exist whether or not a game is installed.
# TODO: Narrow these down on the wiki itself so they can be dropped here.
TOO_BROAD_PATHS: tuple[str, ...] = (
    "<home>/Documents",
    "<home>/Saved Games",
    "<root>/config",
    "<winDir>/win.ini",
)

_LEADING_TILDE_RE = re.compile(r"^~(?=/|$)")


@lru_cache(maxsize=None)
def _marker_pattern(token: str) -> re.Pattern:
    return re.compile(re.escape("{{P|" + token + "}}"), re.IGNORECASE)


def path_contains_argument(path: str, arg: PathArgument) -> bool:
    """Check whether a raw path uses {{P|token}} (case-insensitive)."""
    return _marker_pattern(arg.token).search(path) is not None


def get_path_type(raw_path: str) -> PathType:
    """Classify a raw (unresolved) path by the registry-root tokens it uses."""
    for arg in PATH_ARGUMENTS:
        if arg.registry and path_contains_argument(raw_path, arg):
            return PathType.REGISTRY
    return PathType.FILE_SYSTEM


def normalize_separators(path: str) -> str:
    """
    Normalize a substituted path.

    - Backslashes become forward slashes
    - A single trailing slash is dropped
    - A leading `~` becomes `<home>`
    """
    path = path.replace("\\", "/")
    if path.endswith("/"):
        path = path[:-1]
    return _LEADING_TILDE_RE.sub("<home>", path)


def resolve_path(raw_path: str) -> tuple[str, PathType]:
    """
    Resolve every known {{P|...}} argument in a raw wiki path.

    Unknown arguments are left in place.

    Args:
        raw_path: Path text as written in the wiki template

    Returns:
        (resolved path, path type)

    Raises:
        UnsupportedPathError: The path uses an argument we cannot map, or
            an argument keeps reappearing after substitution
    """
    path_type = get_path_type(raw_path)
    path = raw_path

    for arg in PATH_ARGUMENTS:
        if arg.unsupported and path_contains_argument(path, arg):
            raise UnsupportedPathError(f"Unsupported path argument: {arg.token}")

        pattern = _marker_pattern(arg.token)
        passes = 0
        while pattern.search(path):
            path = pattern.sub(lambda _m: arg.mapped, path)
            passes += 1
            if passes >= MAX_SUBSTITUTION_PASSES:
                raise UnsupportedPathError(f"Unable to resolve path arguments in: {path}")

    resolved = normalize_separators(path)
    logger.debug(f"Resolved {raw_path!r} -> {resolved!r} ({path_type})")
    return resolved, path_type


def is_too_broad(path: str, extra: Iterable[str] = ()) -> bool:
    """
    Check whether a resolved path is too generic to identify a game.

    True for a bare placeholder with no sub-path (e.g. `<winAppData>`),
    and for known locations that exist regardless of install state.

    Args:
        path: Resolved path
        extra: Additional resolved paths to reject
    """
    if path in MAPPED_VALUES:
        return True
    if path in TOO_BROAD_PATHS:
        return True
    return path in set(extra)
