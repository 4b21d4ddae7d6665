from __future__ import annotations

import base64
import logging
from typing import Optional
from urllib.parse import quote

import requests

from .config import RepoConfig
from .models import RemoteFile

logger = logging.getLogger(__name__)

USER_AGENT = "slides-manager"


class RemoteAPIError(RuntimeError):
    def __init__(self, status: int, body: str, reason: str = "") -> None:
        self.status = status
        self.body = body
        self.reason = reason
        label = f"{status} {reason}".strip()
        super().__init__(f"GitHub {label}: {body}")


def build_session(token: str) -> requests.Session:
    session = requests.Session()
    session.headers.update(
        {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }
    )
    return session


class RepoFileClient:
    """Single-file reads and writes through the GitHub contents API."""

    def __init__(self, config: RepoConfig, session: Optional[requests.Session] = None) -> None:
        token = config.require_token()
        self.config = config
        self.session = session if session is not None else build_session(token)

    def _contents_url(self, path: str) -> str:
        return (
            f"{self.config.api_url}/repos/{self.config.owner}/{self.config.repo}"
            f"/contents/{quote(path.lstrip('/'), safe='/')}"
        )

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        kwargs.setdefault("timeout", self.config.timeout)
        return self.session.request(method, self._contents_url(path), **kwargs)

    @staticmethod
    def _raise_for_status(res: requests.Response) -> None:
        if not res.ok:
            raise RemoteAPIError(res.status_code, res.text, res.reason or "")

    def get_file(self, path: str, branch: Optional[str] = None) -> Optional[RemoteFile]:
        """Return the file at ``path`` or None when the API reports 404."""
        ref = branch or self.config.branch
        res = self._request("GET", path, params={"ref": ref})
        if res.status_code == 404:
            return None
        self._raise_for_status(res)
        payload = res.json()
        if isinstance(payload, list):
            # a listing means the path is a directory, not a file
            raise RemoteAPIError(res.status_code, f"'{path}' is a directory", res.reason or "")
        return RemoteFile.from_api(payload)

    def put_file(
        self,
        path: str,
        content: bytes,
        message: str,
        sha: Optional[str] = None,
        branch: Optional[str] = None,
    ) -> str:
        """Create or update ``path`` and return the resulting commit sha.

        Omitting ``sha`` asks the API to create a new file; passing the sha of
        the current blob updates it and fails with 409 if it moved meanwhile.
        """
        body = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
            "branch": branch or self.config.branch,
        }
        if sha:
            body["sha"] = sha
        res = self._request("PUT", path, json=body)
        self._raise_for_status(res)
        out = res.json()
        commit_sha = (out.get("commit") or {}).get("sha", "")
        logger.info("Committed %s to %s (%s)", path, body["branch"], commit_sha)
        return commit_sha

    def delete_file(self, path: str, branch: Optional[str] = None) -> bool:
        """Delete ``path``. Returns False when it was already gone."""
        ref = branch or self.config.branch
        info = self.get_file(path, ref)
        if not info:
            logger.debug("Skip delete of %s: not found on %s", path, ref)
            return False
        body = {
            "message": f"chore(slides): delete {path}",
            "sha": info.sha,
            "branch": ref,
        }
        res = self._request("DELETE", path, json=body)
        self._raise_for_status(res)
        logger.info("Deleted %s from %s", path, ref)
        return True
