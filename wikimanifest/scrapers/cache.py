"""
Wiki page cache for incremental manifest updates.

Tracks, per page title, the page id, the revision last processed and
whether that revision had rows we could not use:

- revId null: discovered through the category listing, never processed
- unsupportedOs / unsupportedPath / tooBroad: sticky until the page is
  processed again and the problem is gone

Entries are never removed automatically.
"""

import logging
from typing import Iterable, Iterator, Optional

from ..models import CacheEntry
from .extract import ExtractionTallies
from .wiki_client import CategoryPage

logger = logging.getLogger(__name__)


class WikiGameCache:
    """In-memory view of the persisted page cache."""

    def __init__(self, entries: Optional[dict[str, CacheEntry]] = None):
        self.entries: dict[str, CacheEntry] = entries if entries is not None else {}

    def __contains__(self, title: str) -> bool:
        return title in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def get(self, title: str) -> Optional[CacheEntry]:
        return self.entries.get(title)

    def mark_new_pages(self, pages: Iterable[CategoryPage]) -> list[str]:
        """
        Add placeholder entries for pages not seen before.

        Returns:
            Titles that were added
        """
        added = []
        for page in pages:
            if page.title not in self.entries:
                self.entries[page.title] = CacheEntry(page_id=page.page_id, rev_id=None)
                added.append(page.title)

        if added:
            logger.info(f"[Cache] {len(added)} new pages discovered")
        return added

    def update_after_extraction(
        self,
        title: str,
        tallies: ExtractionTallies,
        rev_id: Optional[int],
        page_id: Optional[int] = None,
    ) -> CacheEntry:
        """
        Record the outcome of processing a page.

        Each failure flag is set when its tally is nonzero and cleared
        otherwise; the revision becomes the one just processed (0 when
        the wiki did not report one).
        """
        entry = self.entries.get(title)
        if entry is None:
            # Explicitly requested pages may not be in the category listing yet
            entry = CacheEntry(page_id=page_id or 0)
            self.entries[title] = entry

        entry.unsupported_os = True if tallies.unsupported_os > 0 else None
        entry.unsupported_path = True if tallies.unsupported_path > 0 else None
        entry.too_broad = True if tallies.too_broad > 0 else None
        entry.rev_id = rev_id if rev_id is not None else 0

        logger.debug(f"[Cache] {title}: {entry.to_yaml()}")
        return entry

    def mark_stale(self, latest_revisions: dict[str, int]) -> list[str]:
        """
        Reset pages whose wiki revision moved past the processed one.

        Returns:
            Titles that were reset to unprocessed
        """
        stale = []
        for title, rev_id in latest_revisions.items():
            entry = self.entries.get(title)
            if entry is None or entry.rev_id is None:
                continue
            if entry.rev_id != rev_id:
                entry.rev_id = None
                stale.append(title)

        if stale:
            logger.info(f"[Cache] {len(stale)} pages changed since last run")
        return stale

    def select(
        self,
        new: bool = False,
        unsupported_os: bool = False,
        unsupported_path: bool = False,
        too_broad: bool = False,
    ) -> list[str]:
        """Titles matching any of the requested conditions, in cache order."""
        titles = []
        for title, entry in self.entries.items():
            if (
                (new and entry.is_new)
                or (unsupported_os and entry.unsupported_os)
                or (unsupported_path and entry.unsupported_path)
                or (too_broad and entry.too_broad)
            ):
                titles.append(title)
        return titles

    def to_yaml(self) -> dict:
        return {title: entry.to_yaml() for title, entry in self.entries.items()}

    @classmethod
    def from_yaml(cls, data: dict) -> "WikiGameCache":
        return cls({title: CacheEntry.model_validate(raw) for title, raw in data.items()})
