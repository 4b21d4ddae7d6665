"""Shared fixtures: an in-memory stand-in for the GitHub contents API."""

import base64
import hashlib
import json

import pytest

from src.github_store import RemoteAPIError, RemoteFile, RepoConfig


class FakeRepoClient:
    """Mimics RepoFileClient against a dict of path -> bytes."""

    def __init__(self, files=None):
        self.files = {}
        self.commits = []
        self.deleted = []
        self.fail_deletes = set()
        for path, content in (files or {}).items():
            self.files[path] = content if isinstance(content, bytes) else content.encode("utf-8")

    @staticmethod
    def _sha(content):
        return hashlib.sha1(content).hexdigest()

    def get_file(self, path, branch=None):
        if path not in self.files:
            return None
        content = self.files[path]
        return RemoteFile(
            path=path,
            sha=self._sha(content),
            content=base64.encodebytes(content).decode("ascii"),
            encoding="base64",
        )

    def put_file(self, path, content, message, sha=None, branch=None):
        current = self.files.get(path)
        if current is not None and sha != self._sha(current):
            raise RemoteAPIError(409, "sha does not match", "Conflict")
        if current is None and sha:
            raise RemoteAPIError(422, "sha supplied for missing file", "Unprocessable Entity")
        self.files[path] = content
        commit_sha = f"commit{len(self.commits) + 1}"
        self.commits.append({"path": path, "message": message, "sha": sha, "commit": commit_sha})
        return commit_sha

    def delete_file(self, path, branch=None):
        if path in self.fail_deletes:
            raise RemoteAPIError(500, "boom", "Internal Server Error")
        if path not in self.files:
            return False
        del self.files[path]
        self.deleted.append(path)
        return True

    def manifest_json(self, path="slides/manifest.json"):
        return json.loads(self.files[path].decode("utf-8"))


@pytest.fixture
def repo_config():
    return RepoConfig(token="test-token", owner="octo", repo="deck", branch="main")


@pytest.fixture
def fake_repo():
    return FakeRepoClient()
