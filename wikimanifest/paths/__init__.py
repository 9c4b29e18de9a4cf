"""Path argument resolution and applicability inference."""

from .arguments import PATH_ARGUMENTS, PathArgument, lookup_argument
from .constraints import (
    constraint_from_path,
    constraint_from_system,
    os_from_path,
    parse_os,
    store_from_path,
)
from .resolver import TOO_BROAD_PATHS, get_path_type, is_too_broad, resolve_path

__all__ = [
    "PATH_ARGUMENTS",
    "PathArgument",
    "lookup_argument",
    "constraint_from_path",
    "constraint_from_system",
    "os_from_path",
    "parse_os",
    "store_from_path",
    "TOO_BROAD_PATHS",
    "get_path_type",
    "is_too_broad",
    "resolve_path",
]
