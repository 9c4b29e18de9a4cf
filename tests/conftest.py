"""
Shared test fixtures for the wikimanifest test suite.

Provides:
- FakeWikiClient: deterministic stand-in for WikiClient (no network)
- Template helpers for building page content
- Temporary cache/manifest files
"""

from typing import Any

import pytest

from wikimanifest.errors import WikiApiError
from wikimanifest.scrapers.wiki_client import CategoryPage, TemplateNode, WikiPage
from wikimanifest.store.yaml_store import ManifestFile, WikiGameCacheFile


# ---------------------------------------------------------------------------
# Template helpers
# ---------------------------------------------------------------------------

def saves(system: str, path: str) -> TemplateNode:
    return TemplateNode(name="Game data/saves", params={"1": system, "2": path})


def config(system: str, path: str) -> TemplateNode:
    return TemplateNode(name="Game data/config", params={"1": system, "2": path})


def infobox(steam_appid: str) -> TemplateNode:
    return TemplateNode(name="Infobox game", params={"steam appid": steam_appid})


# ---------------------------------------------------------------------------
# FakeWikiClient: deterministic stub
# ---------------------------------------------------------------------------

class FakeWikiClient:
    """WikiClient stand-in serving canned pages.

    Usage:
        client = FakeWikiClient()
        client.add_page("Celeste", 101, rev_id=5, templates=[saves(...)])
        page = client.get_page("Celeste")
    """

    def __init__(self):
        self.pages: dict[str, WikiPage] = {}
        self.category: list[CategoryPage] = []
        self.latest: dict[str, int] = {}
        self.failing: set[str] = set()
        self._call_history: list[dict[str, Any]] = []

    def add_page(self, title: str, page_id: int, rev_id=1, templates=None, listed=True):
        self.pages[title] = WikiPage(
            title=title, page_id=page_id, rev_id=rev_id, templates=list(templates or []),
        )
        if listed:
            self.category.append(CategoryPage(page_id=page_id, title=title))
        if rev_id is not None:
            self.latest[title] = rev_id

    @property
    def call_history(self) -> list[dict[str, Any]]:
        return self._call_history

    def get_category_members(self, category: str) -> list[CategoryPage]:
        self._call_history.append({"method": "get_category_members", "category": category})
        return list(self.category)

    def get_page(self, title: str) -> WikiPage:
        self._call_history.append({"method": "get_page", "title": title})
        if title in self.failing:
            raise WikiApiError(f"Max retries exceeded for query: {title}")
        return self.pages.get(title, WikiPage(title=title))

    def get_latest_revisions(self, titles: list[str]) -> dict[str, int]:
        self._call_history.append({"method": "get_latest_revisions", "titles": list(titles)})
        return {t: self.latest[t] for t in titles if t in self.latest}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_client():
    """Fresh FakeWikiClient instance."""
    return FakeWikiClient()


@pytest.fixture
def cache_file(tmp_path):
    return WikiGameCacheFile(tmp_path / "data" / "wiki-game-cache.yaml")


@pytest.fixture
def manifest_file(tmp_path):
    return ManifestFile(tmp_path / "data" / "manifest.yaml")
