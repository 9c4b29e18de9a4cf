"""
Path argument table for PCGamingWiki's {{P|...}} template.

https://www.pcgamingwiki.com/wiki/Template:Path

Each argument maps to a portable manifest variable (or a registry root),
optionally implying the OS or store the path applies to. Adding support
for a new argument is a new table row, never new logic.
"""

from dataclasses import dataclass
from typing import Optional

from ..enums import Os, Store
from ..models import Constraint


@dataclass(frozen=True)
class PathArgument:
    """One {{P|token}} placeholder and what it resolves to."""
    token: str
    mapped: str
    when: Optional[Constraint] = None
    registry: bool = False      # token is a registry root
    unsupported: bool = False   # cannot be mapped faithfully; reject the path

    @property
    def marker(self) -> str:
        return "{{P|" + self.token + "}}"


_WINDOWS = Constraint(os=Os.WINDOWS)

# Order is the substitution order. Distinct tokens never overlap, so it
# does not affect the result.
PATH_ARGUMENTS: tuple[PathArgument, ...] = (
    PathArgument("game", "<base>"),
    PathArgument("uid", "<storeUserId>"),
    PathArgument("steam", "<root>", when=Constraint(store=Store.STEAM)),
    PathArgument("uplay", "<root>", when=Constraint(store=Store.UPLAY)),
    PathArgument("hkcu", "HKEY_CURRENT_USER", when=_WINDOWS, registry=True),
    PathArgument("hklm", "HKEY_LOCAL_MACHINE", when=_WINDOWS, registry=True),
    PathArgument("wow64", "<regWow64>", when=_WINDOWS, registry=True, unsupported=True),
    PathArgument("username", "<osUserName>", when=_WINDOWS),
    PathArgument("userprofile", "<home>", when=_WINDOWS),
    PathArgument("userprofile\\documents", "<winDocuments>", when=_WINDOWS),
    PathArgument("appdata", "<winAppData>", when=_WINDOWS),
    PathArgument("localappdata", "<winLocalAppData>", when=_WINDOWS),
    PathArgument("public", "<winPublic>", when=_WINDOWS),
    PathArgument("allusersprofile", "<winProgramData>", when=_WINDOWS),
    PathArgument("programdata", "<winProgramData>", when=_WINDOWS),
    PathArgument("windir", "<winDir>", when=_WINDOWS),
    PathArgument("syswow64", "<winDir>/SysWOW64", when=_WINDOWS),
    PathArgument("osxhome", "<home>", when=Constraint(os=Os.MAC)),
    PathArgument("linuxhome", "<home>", when=Constraint(os=Os.LINUX)),
    PathArgument("xdgdatahome", "<xdgData>", when=Constraint(os=Os.LINUX)),
    PathArgument("xdgconfighome", "<xdgConfig>", when=Constraint(os=Os.LINUX)),
)

_BY_TOKEN: dict[str, PathArgument] = {arg.token.lower(): arg for arg in PATH_ARGUMENTS}

# Every value a bare placeholder can resolve to
MAPPED_VALUES: frozenset[str] = frozenset(arg.mapped for arg in PATH_ARGUMENTS)


def lookup_argument(token: str) -> Optional[PathArgument]:
    """Find the table entry for a token, ignoring case. None if unknown."""
    return _BY_TOKEN.get(token.strip().lower())
