"""Configuration management for wikimanifest."""

import os
from pathlib import Path

from dotenv import load_dotenv


# Load environment variables from .env file
def _find_env_file() -> Path | None:
    """Find the .env file, searching up the directory tree."""
    current = Path(__file__).parent
    for _ in range(5):  # Search up to 5 levels
        env_path = current / ".env"
        if env_path.exists():
            return env_path
        current = current.parent
    return None


_env_file = _find_env_file()
if _env_file:
    load_dotenv(_env_file)


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default


class Config:
    """Application configuration from environment variables."""

    # Wiki API
    WIKI_API_URL: str = os.getenv("WIKI_API_URL", "https://www.pcgamingwiki.com/w/api.php")
    WIKI_CATEGORY: str = os.getenv("WIKI_CATEGORY", "Games")
    WIKI_USER_AGENT: str = os.getenv(
        "WIKI_USER_AGENT",
        "wikimanifest/0.1 (game save manifest builder)",
    )
    WIKI_REQUEST_DELAY: float = _float_env("WIKI_REQUEST_DELAY", 0.5)  # seconds between requests
    WIKI_REQUEST_TIMEOUT: float = _float_env("WIKI_REQUEST_TIMEOUT", 30)
    WIKI_MAX_RETRIES: int = _int_env("WIKI_MAX_RETRIES", 3)

    # Files
    DATA_DIR: str = os.getenv("DATA_DIR", "data")
    CACHE_FILE: str = os.getenv("CACHE_FILE", "")  # Empty = DATA_DIR/wiki-game-cache.yaml
    MANIFEST_FILE: str = os.getenv("MANIFEST_FILE", "")  # Empty = DATA_DIR/manifest.yaml

    # Extraction
    EXTRA_TOO_BROAD_PATHS: str = os.getenv("EXTRA_TOO_BROAD_PATHS", "")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> list[str]:
        """Validate configuration, return list of issues."""
        issues = []

        if not cls.WIKI_API_URL.startswith(("http://", "https://")):
            issues.append(f"WIKI_API_URL must be an http(s) URL, got '{cls.WIKI_API_URL}'")
        if not cls.WIKI_CATEGORY.strip():
            issues.append("WIKI_CATEGORY must not be empty")
        if cls.WIKI_MAX_RETRIES < 1:
            issues.append("WIKI_MAX_RETRIES must be at least 1")
        if cls.WIKI_REQUEST_DELAY < 0:
            issues.append("WIKI_REQUEST_DELAY must not be negative")

        return issues

    @classmethod
    def get_cache_path(cls) -> Path:
        """Get the wiki page cache file path."""
        if cls.CACHE_FILE:
            return Path(cls.CACHE_FILE)
        return Path(cls.DATA_DIR) / "wiki-game-cache.yaml"

    @classmethod
    def get_manifest_path(cls) -> Path:
        """Get the manifest file path."""
        if cls.MANIFEST_FILE:
            return Path(cls.MANIFEST_FILE)
        return Path(cls.DATA_DIR) / "manifest.yaml"

    @classmethod
    def get_extra_too_broad_paths(cls) -> list[str]:
        """Resolved paths to reject in addition to the built-in denylist."""
        return [p.strip() for p in cls.EXTRA_TOO_BROAD_PATHS.split(";") if p.strip()]
