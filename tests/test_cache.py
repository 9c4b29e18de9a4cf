"""Tests for WikiGameCache bookkeeping."""

from wikimanifest.models import CacheEntry
from wikimanifest.scrapers.cache import WikiGameCache
from wikimanifest.scrapers.extract import ExtractionTallies
from wikimanifest.scrapers.wiki_client import CategoryPage


def make_cache(**entries):
    return WikiGameCache({title: CacheEntry(**data) for title, data in entries.items()})


class TestMarkNewPages:
    def test_adds_placeholders(self):
        cache = WikiGameCache()
        added = cache.mark_new_pages([CategoryPage(1, "Celeste"), CategoryPage(2, "Hades")])

        assert added == ["Celeste", "Hades"]
        assert cache.get("Celeste") == CacheEntry(page_id=1, rev_id=None)
        assert cache.get("Hades").is_new

    def test_existing_entries_untouched(self):
        cache = make_cache(Celeste={"page_id": 1, "rev_id": 900, "too_broad": True})
        added = cache.mark_new_pages([CategoryPage(1, "Celeste")])

        assert added == []
        assert cache.get("Celeste").rev_id == 900
        assert cache.get("Celeste").too_broad is True


class TestUpdateAfterExtraction:
    def test_sets_flags_and_revision(self):
        cache = make_cache(Celeste={"page_id": 1})
        entry = cache.update_after_extraction(
            "Celeste", ExtractionTallies(unsupported_os=2, too_broad=1), rev_id=1234,
        )

        assert entry.rev_id == 1234
        assert entry.unsupported_os is True
        assert entry.unsupported_path is None
        assert entry.too_broad is True

    def test_clears_flags(self):
        cache = make_cache(Celeste={
            "page_id": 1, "rev_id": 5,
            "unsupported_os": True, "unsupported_path": True, "too_broad": True,
        })
        entry = cache.update_after_extraction("Celeste", ExtractionTallies(), rev_id=6)

        assert entry.to_yaml() == {"pageId": 1, "revId": 6}

    def test_missing_revision_becomes_zero(self):
        cache = make_cache(Celeste={"page_id": 1})
        assert cache.update_after_extraction("Celeste", ExtractionTallies(), rev_id=None).rev_id == 0

    def test_unknown_title_gets_entry(self):
        cache = WikiGameCache()
        cache.update_after_extraction("Hades", ExtractionTallies(), rev_id=7, page_id=42)
        assert cache.get("Hades") == CacheEntry(page_id=42, rev_id=7)


class TestStaleAndSelect:
    def test_mark_stale_resets_changed_pages(self):
        cache = make_cache(
            A={"page_id": 1, "rev_id": 10},
            B={"page_id": 2, "rev_id": 20},
            C={"page_id": 3},
        )
        stale = cache.mark_stale({"A": 11, "B": 20, "C": 30})

        assert stale == ["A"]
        assert cache.get("A").is_new
        assert cache.get("B").rev_id == 20

    def test_select_by_condition(self):
        cache = make_cache(
            A={"page_id": 1},
            B={"page_id": 2, "rev_id": 1, "unsupported_os": True},
            C={"page_id": 3, "rev_id": 1, "unsupported_path": True},
            D={"page_id": 4, "rev_id": 1, "too_broad": True},
            E={"page_id": 5, "rev_id": 1},
        )
        assert cache.select(new=True) == ["A"]
        assert cache.select(new=True, too_broad=True) == ["A", "D"]
        assert cache.select(unsupported_os=True, unsupported_path=True) == ["B", "C"]
        assert cache.select() == []


class TestYaml:
    def test_round_trip_keeps_null_revision(self):
        data = {
            "Celeste": {"pageId": 1, "revId": None},
            "Hades": {"pageId": 2, "revId": 9, "unsupportedPath": True},
        }
        cache = WikiGameCache.from_yaml(data)

        assert cache.get("Hades").unsupported_path is True
        assert cache.to_yaml() == data
