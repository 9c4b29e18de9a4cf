"""
Game record extraction from PCGamingWiki template nodes.

https://www.pcgamingwiki.com/wiki/Template:Game_data

A page lists save and config locations as rows like

    {{Game data/saves|Windows|{{P|appdata}}\\Studio\\Game}}
    {{Game data/config|Steam|{{P|steam}}\\userdata\\{{P|uid}}\\12345}}

Each row is resolved independently; a row we cannot represent is counted
and skipped without affecting the rest of the page.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..enums import ErrorKind, PathType, Tag
from ..errors import WikiDataError
from ..models import Constraint, GameRecord, PathEntry, SteamInfo
from ..paths.constraints import constraint_from_system, store_from_path
from ..paths.resolver import is_too_broad, resolve_path
from .wiki_client import TemplateNode

logger = logging.getLogger(__name__)


INFOBOX_TEMPLATE = "Infobox game"

# Template name -> tag for the paths it declares
DATA_TEMPLATES: dict[str, Tag] = {
    "Game data/saves": Tag.SAVE,
    "Game data/config": Tag.CONFIG,
}


@dataclass
class ExtractionTallies:
    """Skipped template rows on a page, by failure category."""
    unsupported_os: int = 0
    unsupported_path: int = 0
    too_broad: int = 0

    def count(self, kind: ErrorKind) -> None:
        if kind == ErrorKind.UNSUPPORTED_OS:
            self.unsupported_os += 1
        elif kind == ErrorKind.UNSUPPORTED_PATH:
            self.unsupported_path += 1

    @property
    def total(self) -> int:
        return self.unsupported_os + self.unsupported_path + self.too_broad


def parse_steam_id(value: str) -> Optional[int]:
    """Steam app id from an infobox value; only positive integers count."""
    try:
        steam_id = int(value.strip())
    except ValueError:
        return None
    return steam_id if steam_id > 0 else None


def _entry_for(entries: dict[str, PathEntry], path: str) -> PathEntry:
    """Get-or-insert the entry for a resolved path."""
    if path not in entries:
        entries[path] = PathEntry()
    return entries[path]


def _finalize(entries: dict[str, PathEntry]) -> Optional[dict[str, PathEntry]]:
    if not entries:
        return None
    for entry in entries.values():
        entry.prune()
    return entries


class GameExtractor:
    """Folds the template nodes of one page into a GameRecord."""

    def __init__(self, extra_too_broad: Iterable[str] = ()):
        """
        Args:
            extra_too_broad: Resolved paths to reject on top of the
                built-in denylist
        """
        self.extra_too_broad = tuple(extra_too_broad)

    def extract(self, templates: Iterable[TemplateNode]) -> tuple[GameRecord, ExtractionTallies]:
        """
        Build the manifest record for a page.

        Args:
            templates: Every template node on the page, in page order

        Returns:
            (sparse GameRecord, failure tallies)
        """
        steam: Optional[SteamInfo] = None
        files: dict[str, PathEntry] = {}
        registry: dict[str, PathEntry] = {}
        tallies = ExtractionTallies()

        for template in templates:
            if template.name == INFOBOX_TEMPLATE:
                steam_id = parse_steam_id(template.get("steam appid"))
                if steam_id is not None:
                    steam = SteamInfo(id=steam_id)
                continue

            tag = DATA_TEMPLATES.get(template.name)
            if tag is None:
                continue

            raw_path = template.get("2")
            if not raw_path:
                continue

            try:
                self._add_path(template, tag, raw_path, files, registry, tallies)
            except WikiDataError as e:
                logger.info(f"[Extract] Skipping {template}: {e}")
                tallies.count(e.kind)
            except Exception as e:
                logger.warning(f"[Extract] Malformed template {template}: {e}")

        record = GameRecord(
            steam=steam,
            files=_finalize(files),
            registry=_finalize(registry),
        )
        return record, tallies

    def _add_path(
        self,
        template: TemplateNode,
        tag: Tag,
        raw_path: str,
        files: dict[str, PathEntry],
        registry: dict[str, PathEntry],
        tallies: ExtractionTallies,
    ) -> None:
        path, path_type = resolve_path(raw_path)
        if is_too_broad(path, self.extra_too_broad):
            logger.info(f"[Extract] Path too broad: {template}")
            tallies.too_broad += 1
            return

        if path_type == PathType.FILE_SYSTEM:
            constraint = constraint_from_system(template.get("1"), raw_path)
            entry = _entry_for(files, path)
        else:
            # Registry rows are Windows by definition; only the store matters
            constraint = Constraint(store=store_from_path(raw_path))
            entry = _entry_for(registry, path)

        entry.add_constraint(constraint)
        entry.add_tag(tag)
