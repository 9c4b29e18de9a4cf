"""YAML persistence for the manifest and the wiki page cache."""

import logging
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from ..errors import StoreError
from ..models import GameRecord
from ..scrapers.cache import WikiGameCache

logger = logging.getLogger(__name__)


class YamlFile:
    """A mapping persisted to a YAML file.

    The file is read lazily on first access and written back with sorted
    keys so diffs between runs stay small.
    """

    def __init__(self, path: Path):
        self._path = Path(path)
        self._data: Optional[dict[str, Any]] = None

    @property
    def path(self) -> Path:
        return self._path

    def default_data(self) -> dict[str, Any]:
        return {}

    def load(self) -> dict[str, Any]:
        """Load data from file, or return defaults if it doesn't exist.

        Raises:
            StoreError: If the file exists but is not a YAML mapping
        """
        if self._data is not None:
            return self._data

        if not self._path.exists():
            logger.debug(f"[Store] {self._path} not found, starting empty")
            self._data = self.default_data()
            return self._data

        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise StoreError(f"Could not parse {self._path}: {e}") from e

        if data is None:
            data = self.default_data()
        if not isinstance(data, dict):
            raise StoreError(f"Expected a mapping at the top of {self._path}")

        self._data = data
        return self._data

    @property
    def data(self) -> dict[str, Any]:
        return self.load()

    def save(self) -> None:
        """Write the current data, creating parent directories as needed.

        The YAML goes to a sibling `.tmp` file first and replaces the
        target only once fully written.
        """
        data = self.serialize()
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(
                    data,
                    f,
                    sort_keys=True,
                    allow_unicode=True,
                    default_flow_style=False,
                    width=float("inf"),
                )
            tmp_path.replace(self._path)
        finally:
            tmp_path.unlink(missing_ok=True)
        logger.debug(f"[Store] Saved {self._path}")

    def serialize(self) -> dict[str, Any]:
        return self.data


class WikiGameCacheFile(YamlFile):
    """Page title -> CacheEntry, backed by wiki-game-cache.yaml."""

    def __init__(self, path: Path):
        super().__init__(path)
        self._cache: Optional[WikiGameCache] = None

    def load(self) -> dict[str, Any]:
        """Load the file and validate every entry.

        Raises:
            StoreError: If the file is unreadable or an entry is invalid
        """
        data = super().load()
        if self._cache is None:
            try:
                self._cache = WikiGameCache.from_yaml(data)
            except ValidationError as e:
                raise StoreError(f"Invalid cache entry in {self.path}: {e}") from e
        return data

    @property
    def cache(self) -> WikiGameCache:
        self.load()
        return self._cache

    def serialize(self) -> dict[str, Any]:
        return self.cache.to_yaml()


class ManifestFile(YamlFile):
    """Game title -> sparse game record, backed by manifest.yaml."""

    def set_game(self, title: str, record: GameRecord) -> None:
        """Replace a game's entry; a record with no data removes it."""
        if record.is_empty():
            if self.data.pop(title, None) is not None:
                logger.info(f"[Store] Removed {title} from manifest (no usable data)")
            return
        self.data[title] = record.to_manifest()

    def get_game(self, title: str) -> Optional[dict]:
        return self.data.get(title)
