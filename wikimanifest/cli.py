"""
WIKI MANIFEST UPDATE
====================
Refreshes the manifest from PCGamingWiki save/config data.

Usage:
    wikimanifest                         # New pages only
    wikimanifest --stale                 # Also pages edited since last run
    wikimanifest --unsupported-path      # Also pages that had unsupported paths
    wikimanifest --all --limit 100       # First 100 cached pages
    wikimanifest "Celeste" "Hades"       # Specific pages

Files default to data/wiki-game-cache.yaml and data/manifest.yaml
(see CACHE_FILE, MANIFEST_FILE and DATA_DIR).
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import Config
from .errors import StoreError, WikiApiError
from .logging_config import setup_logging
from .pipeline import ManifestUpdater, PageSelection
from .scrapers.extract import GameExtractor
from .scrapers.wiki_client import WikiClient
from .store.yaml_store import ManifestFile, WikiGameCacheFile

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wikimanifest",
        description="Update the game manifest from PCGamingWiki",
    )
    parser.add_argument("titles", nargs="*", help="Process only these page titles")
    parser.add_argument("--all", action="store_true", help="Process every cached page")
    parser.add_argument("--stale", action="store_true", help="Re-process pages edited since last run")
    parser.add_argument("--unsupported-os", action="store_true", help="Retry pages flagged unsupportedOs")
    parser.add_argument("--unsupported-path", action="store_true", help="Retry pages flagged unsupportedPath")
    parser.add_argument("--too-broad", action="store_true", help="Retry pages flagged tooBroad")
    parser.add_argument("--limit", type=int, help="Process at most N pages")
    parser.add_argument("--no-discover", action="store_true", help="Skip the category listing")
    parser.add_argument("--cache", type=str, help="Path to the wiki page cache file")
    parser.add_argument("--manifest", type=str, help="Path to the manifest file")
    parser.add_argument("--log-level", type=str, default=Config.LOG_LEVEL, help="Logging level")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    issues = Config.validate()
    if issues:
        for issue in issues:
            logger.error(issue)
        return 1

    updater = ManifestUpdater(
        client=WikiClient(),
        cache_file=WikiGameCacheFile(Path(args.cache) if args.cache else Config.get_cache_path()),
        manifest_file=ManifestFile(Path(args.manifest) if args.manifest else Config.get_manifest_path()),
        extractor=GameExtractor(extra_too_broad=Config.get_extra_too_broad_paths()),
    )
    selection = PageSelection(
        titles=args.titles,
        all=args.all,
        unsupported_os=args.unsupported_os,
        unsupported_path=args.unsupported_path,
        too_broad=args.too_broad,
        limit=args.limit,
    )

    try:
        updater.run(
            selection,
            category=None if args.no_discover or args.titles else Config.WIKI_CATEGORY,
            stale=args.stale,
        )
    except (WikiApiError, StoreError) as e:
        logger.error(f"Update aborted: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
