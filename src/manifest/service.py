from __future__ import annotations

import json
import logging
from typing import Any, List, Optional, Sequence, Tuple

import requests
from pydantic import ValidationError

from src.github_store import RemoteAPIError, RemoteFile, RepoFileClient

from .models import DeletionOutcome, ManifestItem, ReplaceResult, decode_entry, normalize_manifest

logger = logging.getLogger(__name__)


class ManifestValidationError(ValueError):
    pass


def _parse_remote(remote: RemoteFile) -> Any:
    return json.loads(remote.text())


def serialize_items(items: Sequence[Any]) -> bytes:
    return json.dumps(list(items), indent=2, ensure_ascii=False).encode("utf-8")


def validate_items(items: Any) -> List[ManifestItem]:
    """Check a Replace payload and decode its entries for removal detection.

    Only the array itself is required; entries that are neither objects nor
    path strings are stored as given and take no part in the diff.
    """
    if not isinstance(items, list):
        raise ManifestValidationError("Payload must include an items[] array")
    decoded: List[ManifestItem] = []
    for idx, raw in enumerate(items):
        try:
            decoded.append(decode_entry(raw))
        except ValidationError:
            logger.debug("items[%d] is not a slide object or path string; stored as is", idx)
    return decoded


def removed_sources(old_items: Sequence[ManifestItem], new_items: Sequence[ManifestItem]) -> List[str]:
    new_srcs = {item.path for item in new_items if item.path}
    removed: List[str] = []
    for item in old_items:
        src = item.path
        if src and src not in new_srcs and src not in removed:
            removed.append(src)
    return removed


class ManifestService:
    def __init__(self, client: RepoFileClient, manifest_path: str, branch: Optional[str] = None) -> None:
        self.client = client
        self.manifest_path = manifest_path
        self.branch = branch

    def _load(self) -> Tuple[List[ManifestItem], Optional[str]]:
        remote = self.client.get_file(self.manifest_path, self.branch)
        if remote is None:
            return [], None
        return normalize_manifest(_parse_remote(remote)), remote.sha

    def fetch(self) -> List[ManifestItem]:
        items, _ = self._load()
        return items

    def _delete_one(self, path: str) -> DeletionOutcome:
        try:
            deleted = self.client.delete_file(path, self.branch)
        except (RemoteAPIError, requests.RequestException) as exc:
            logger.warning("Failed to delete removed slide %s: %s", path, exc)
            return DeletionOutcome(path=path, error=str(exc))
        return DeletionOutcome(path=path, deleted=deleted)

    def replace(self, items: Any, delete_files: bool = False) -> ReplaceResult:
        """Overwrite the manifest with ``items`` and optionally prune dropped files.

        Deletions are best effort: the manifest commit is kept whatever happens
        to the individual file deletions that follow it.
        """
        new_items = validate_items(items)
        old_items, sha = self._load()
        removed = removed_sources(old_items, new_items)

        commit_sha = self.client.put_file(
            self.manifest_path,
            serialize_items(items),
            f"chore(manifest): save ({len(items)} items)",
            sha=sha,
            branch=self.branch,
        )
        result = ReplaceResult(commit_sha=commit_sha, removed=removed)

        if delete_files and removed:
            for path in removed:
                result.deletions.append(self._delete_one(path))
            logger.info(
                "Pruned %d of %d removed slides (%d failed)",
                result.deleted_count,
                result.removed_count,
                len(result.failed_paths),
            )
        return result
