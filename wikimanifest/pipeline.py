"""
Incremental manifest update from the wiki.

One run:
1. Discover new pages in the games category (placeholders with revId null)
2. Optionally mark pages whose wiki revision changed as unprocessed again
3. Pick the pages to (re)process
4. For each page, sequentially: fetch, extract, update manifest and cache
5. Save the cache and manifest, even if a page fetch fails midway

A page's cache entry is only touched after its extraction completes, so a
transport failure leaves that page to be picked up by the next run.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from .models import GameRecord
from .scrapers.extract import GameExtractor
from .scrapers.wiki_client import WikiClient
from .store.yaml_store import ManifestFile, WikiGameCacheFile

logger = logging.getLogger(__name__)


@dataclass
class PageSelection:
    """Which cached pages a run should process."""
    titles: list[str] = field(default_factory=list)  # explicit titles win over filters
    all: bool = False
    new: bool = True
    unsupported_os: bool = False
    unsupported_path: bool = False
    too_broad: bool = False
    limit: Optional[int] = None


@dataclass
class UpdateSummary:
    """What a run did."""
    discovered: int = 0
    stale: int = 0
    processed: int = 0
    flagged: int = 0
    games_with_data: int = 0


class ManifestUpdater:
    """Drives the wiki -> manifest update for a set of pages."""

    def __init__(
        self,
        client: WikiClient,
        cache_file: WikiGameCacheFile,
        manifest_file: ManifestFile,
        extractor: Optional[GameExtractor] = None,
    ):
        self.client = client
        self.cache_file = cache_file
        self.manifest_file = manifest_file
        self.extractor = extractor or GameExtractor()

    @property
    def cache(self):
        return self.cache_file.cache

    def discover(self, category: str) -> list[str]:
        """Add placeholder cache entries for pages new to the category."""
        pages = self.client.get_category_members(category)
        return self.cache.mark_new_pages(pages)

    def mark_stale(self) -> list[str]:
        """Reset processed pages whose latest wiki revision differs."""
        processed = [title for title in self.cache if not self.cache.get(title).is_new]
        if not processed:
            return []
        latest = self.client.get_latest_revisions(processed)
        return self.cache.mark_stale(latest)

    def select_titles(self, selection: PageSelection) -> list[str]:
        if selection.titles:
            titles = list(selection.titles)
        elif selection.all:
            titles = list(self.cache)
        else:
            titles = self.cache.select(
                new=selection.new,
                unsupported_os=selection.unsupported_os,
                unsupported_path=selection.unsupported_path,
                too_broad=selection.too_broad,
            )

        if selection.limit is not None:
            titles = titles[:selection.limit]
        return titles

    def process_page(self, title: str) -> GameRecord:
        """Fetch one page and fold it into the manifest and cache.

        Raises:
            WikiApiError: The page could not be fetched; nothing is updated
        """
        logger.info(f"[Update] {title}")
        page = self.client.get_page(title)
        record, tallies = self.extractor.extract(page.templates)

        self.manifest_file.set_game(title, record)
        self.cache.update_after_extraction(title, tallies, page.rev_id, page_id=page.page_id)

        if tallies.total:
            logger.info(
                f"[Update]   skipped rows: unsupported_os={tallies.unsupported_os}, "
                f"unsupported_path={tallies.unsupported_path}, too_broad={tallies.too_broad}"
            )
        return record

    def run(
        self,
        selection: PageSelection,
        category: Optional[str] = None,
        stale: bool = False,
    ) -> UpdateSummary:
        """
        Run a full update.

        Args:
            selection: Which pages to process
            category: Category to discover new pages from (None = skip)
            stale: Also re-queue pages edited since they were processed

        Returns:
            UpdateSummary for the run
        """
        summary = UpdateSummary()
        # Fail on unreadable files before anything can be written back
        self.cache_file.load()
        self.manifest_file.load()

        try:
            if category:
                summary.discovered = len(self.discover(category))
            if stale:
                summary.stale = len(self.mark_stale())

            titles = self.select_titles(selection)
            logger.info(f"[Update] Processing {len(titles)} pages")

            for title in titles:
                record = self.process_page(title)
                summary.processed += 1
                if not record.is_empty():
                    summary.games_with_data += 1
                entry = self.cache.get(title)
                if entry.unsupported_os or entry.unsupported_path or entry.too_broad:
                    summary.flagged += 1
        finally:
            self.cache_file.save()
            self.manifest_file.save()

        logger.info(
            f"[Update] Done: {summary.processed} processed, "
            f"{summary.games_with_data} with data, {summary.flagged} flagged, "
            f"{summary.discovered} discovered, {summary.stale} stale"
        )
        return summary
