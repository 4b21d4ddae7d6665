"""Manifest entry shapes and the normalization applied on read."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

SCHEMA = "objects"


class ManifestItem(BaseModel):
    """One slide. Only a string ``src`` is interpreted; everything else passes through."""

    model_config = ConfigDict(extra="allow")

    src: Optional[Any] = None

    @property
    def path(self) -> Optional[str]:
        """The repository path of the slide, when ``src`` holds one."""
        if isinstance(self.src, str) and self.src:
            return self.src
        return None

    def to_dict(self) -> dict:
        data: dict = {}
        if "src" in self.model_fields_set:
            data["src"] = self.src
        data.update(self.model_extra or {})
        return data


class WrappedManifest(BaseModel):
    """Legacy layout: ``{"slides": [...]}``."""

    slides: List[Any] = Field(default_factory=list)


# Bare path strings are the legacy entry shape, objects the current one.
SlideEntry = Union[StrictStr, ManifestItem]
ManifestDocument = Union[List[Any], WrappedManifest]

_ENTRY_ADAPTER = TypeAdapter(SlideEntry)
_DOCUMENT_ADAPTER = TypeAdapter(ManifestDocument)


def decode_entry(raw: Any) -> ManifestItem:
    entry = _ENTRY_ADAPTER.validate_python(raw)
    if isinstance(entry, str):
        return ManifestItem(src=entry)
    return entry


def normalize_manifest(raw: Any) -> List[ManifestItem]:
    try:
        document = _DOCUMENT_ADAPTER.validate_python(raw)
    except ValidationError:
        logger.warning("Manifest has unexpected shape %s; treating as empty", type(raw).__name__)
        return []
    entries = document.slides if isinstance(document, WrappedManifest) else document

    items: List[ManifestItem] = []
    for idx, entry in enumerate(entries):
        try:
            items.append(decode_entry(entry))
        except ValidationError:
            logger.warning("Skipping manifest entry %d: not a path string or slide object", idx)
    return items


@dataclass(frozen=True)
class DeletionOutcome:
    path: str
    deleted: bool = False
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class ReplaceResult:
    commit_sha: str
    removed: List[str] = field(default_factory=list)
    deletions: List[DeletionOutcome] = field(default_factory=list)

    @property
    def removed_count(self) -> int:
        return len(self.removed)

    @property
    def deleted_count(self) -> int:
        return sum(1 for outcome in self.deletions if outcome.deleted)

    @property
    def failed_paths(self) -> List[str]:
        return [outcome.path for outcome in self.deletions if outcome.failed]

    def to_response(self) -> dict:
        return {
            "commitSha": self.commit_sha,
            "removed": self.removed_count,
            "deletedFiles": self.deleted_count,
            "failedFiles": self.failed_paths,
        }
