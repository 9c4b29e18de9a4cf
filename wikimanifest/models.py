"""Pydantic models for manifest records and the wiki page cache.

Manifest output is sparse: empty `when`/`tags` lists and empty
`files`/`registry` maps are left out entirely, so consumers can treat a
missing `when` as "applies everywhere".
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import Os, Store, Tag


# ─── Manifest ────────────────────────────────────────────────────────────────

class Constraint(BaseModel):
    """Applicability predicate for a path: only on this OS and/or store."""

    model_config = ConfigDict(frozen=True)

    os: Optional[Os] = None
    store: Optional[Store] = None

    def is_empty(self) -> bool:
        """True when neither axis is restricted."""
        return self.os is None and self.store is None


class PathEntry(BaseModel):
    """Everything known about one resolved file or registry path."""

    when: Optional[list[Constraint]] = None
    tags: Optional[list[Tag]] = None

    def add_constraint(self, constraint: Constraint) -> bool:
        """Record a constraint unless it is empty or already present.

        Returns:
            True if the constraint was added
        """
        if constraint.is_empty():
            return False
        if self.when is None:
            self.when = []
        if constraint in self.when:
            return False
        self.when.append(constraint)
        return True

    def add_tag(self, tag: Tag) -> bool:
        """Record a tag once. Returns True if it was new."""
        if self.tags is None:
            self.tags = []
        if tag in self.tags:
            return False
        self.tags.append(tag)
        return True

    def prune(self) -> None:
        """Drop empty lists so they are omitted from output."""
        if not self.when:
            self.when = None
        if not self.tags:
            self.tags = None


class SteamInfo(BaseModel):
    id: int


class GameRecord(BaseModel):
    """Manifest data extracted from a single wiki page."""

    steam: Optional[SteamInfo] = None
    files: Optional[dict[str, PathEntry]] = None
    registry: Optional[dict[str, PathEntry]] = None

    def is_empty(self) -> bool:
        return self.steam is None and not self.files and not self.registry

    def to_manifest(self) -> dict:
        """Sparse, YAML-ready representation."""
        return self.model_dump(mode="json", exclude_none=True)


# ─── Wiki Page Cache ─────────────────────────────────────────────────────────

class CacheEntry(BaseModel):
    """Per-page bookkeeping persisted between runs.

    `rev_id` is None for pages that were discovered through the category
    listing but never processed. The failure flags are sticky until the
    page is processed again; a cleared flag is stored as None (omitted).
    """

    model_config = ConfigDict(populate_by_name=True)

    page_id: int = Field(alias="pageId")
    rev_id: Optional[int] = Field(default=None, alias="revId")
    unsupported_os: Optional[bool] = Field(default=None, alias="unsupportedOs")
    unsupported_path: Optional[bool] = Field(default=None, alias="unsupportedPath")
    too_broad: Optional[bool] = Field(default=None, alias="tooBroad")

    @property
    def is_new(self) -> bool:
        return self.rev_id is None

    def to_yaml(self) -> dict:
        """Alias-keyed dict; `revId` is always written, even when null."""
        data = {"pageId": self.page_id, "revId": self.rev_id}
        data.update(
            self.model_dump(
                by_alias=True,
                exclude_none=True,
                exclude={"page_id", "rev_id"},
            )
        )
        return data
