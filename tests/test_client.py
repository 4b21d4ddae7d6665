"""Tests for the GitHub contents client."""

import base64
from unittest.mock import MagicMock

import pytest

from src.github_store import ConfigError, RemoteAPIError, RepoConfig, RepoFileClient
from src.github_store.client import build_session

CONTENTS_URL = "https://api.github.com/repos/octo/deck/contents/slides/manifest.json"


def _response(status_code=200, payload=None, text="", reason="OK"):
    res = MagicMock()
    res.status_code = status_code
    res.ok = 200 <= status_code < 300
    res.json.return_value = payload
    res.text = text
    res.reason = reason
    return res


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(repo_config, session):
    return RepoFileClient(repo_config, session=session)


def test_client_requires_token():
    with pytest.raises(ConfigError):
        RepoFileClient(RepoConfig(token=None))


def test_build_session_sets_auth_headers():
    s = build_session("secret")
    assert s.headers["Authorization"] == "Bearer secret"
    assert s.headers["Accept"] == "application/vnd.github+json"
    assert s.headers["User-Agent"] == "slides-manager"


def test_get_file_returns_remote_file(client, session):
    session.request.return_value = _response(
        payload={"path": "slides/manifest.json", "sha": "abc", "content": "W10=\n", "encoding": "base64"}
    )
    remote = client.get_file("slides/manifest.json")
    assert remote.sha == "abc"
    assert remote.text() == "[]"
    session.request.assert_called_once_with(
        "GET", CONTENTS_URL, params={"ref": "main"}, timeout=30.0
    )


def test_get_file_not_found_is_none(client, session):
    session.request.return_value = _response(404, text='{"message":"Not Found"}', reason="Not Found")
    assert client.get_file("slides/manifest.json", "dev") is None
    assert session.request.call_args.kwargs["params"] == {"ref": "dev"}


def test_get_file_other_errors_raise(client, session):
    session.request.return_value = _response(401, text="Bad credentials", reason="Unauthorized")
    with pytest.raises(RemoteAPIError) as excinfo:
        client.get_file("slides/manifest.json")
    assert excinfo.value.status == 401
    assert excinfo.value.body == "Bad credentials"
    assert str(excinfo.value) == "GitHub 401 Unauthorized: Bad credentials"


def test_put_file_creates_without_sha(client, session):
    session.request.return_value = _response(201, payload={"commit": {"sha": "c0ffee"}})
    commit = client.put_file("slides/manifest.json", b"[]", "chore(manifest): save (0 items)")
    assert commit == "c0ffee"
    method, url = session.request.call_args.args
    body = session.request.call_args.kwargs["json"]
    assert (method, url) == ("PUT", CONTENTS_URL)
    assert body == {
        "message": "chore(manifest): save (0 items)",
        "content": base64.b64encode(b"[]").decode("ascii"),
        "branch": "main",
    }


def test_put_file_updates_with_sha(client, session):
    session.request.return_value = _response(200, payload={"commit": {"sha": "beef"}})
    client.put_file("slides/manifest.json", b"[]", "msg", sha="old-sha")
    assert session.request.call_args.kwargs["json"]["sha"] == "old-sha"


def test_put_file_conflict_raises(client, session):
    session.request.return_value = _response(409, text="sha mismatch", reason="Conflict")
    with pytest.raises(RemoteAPIError) as excinfo:
        client.put_file("slides/manifest.json", b"[]", "msg", sha="stale")
    assert excinfo.value.status == 409


def test_delete_missing_file_is_noop(client, session):
    session.request.return_value = _response(404, reason="Not Found")
    assert client.delete_file("slides/gone.png") is False
    assert session.request.call_count == 1


def test_delete_file_uses_current_sha(client, session):
    session.request.side_effect = [
        _response(payload={"path": "slides/a.png", "sha": "a-sha", "content": "", "encoding": "base64"}),
        _response(200, payload={"commit": {"sha": "d1"}}),
    ]
    assert client.delete_file("slides/a.png") is True
    method, url = session.request.call_args.args
    assert method == "DELETE"
    assert url.endswith("/contents/slides/a.png")
    assert session.request.call_args.kwargs["json"] == {
        "message": "chore(slides): delete slides/a.png",
        "sha": "a-sha",
        "branch": "main",
    }


def test_delete_file_failure_raises(client, session):
    session.request.side_effect = [
        _response(payload={"path": "slides/a.png", "sha": "a-sha", "content": "", "encoding": "base64"}),
        _response(422, text="nope", reason="Unprocessable Entity"),
    ]
    with pytest.raises(RemoteAPIError):
        client.delete_file("slides/a.png")


def test_paths_are_url_quoted(client, session):
    session.request.return_value = _response(404, reason="Not Found")
    client.get_file("slides/my deck #1.png")
    assert session.request.call_args.args[1].endswith("/contents/slides/my%20deck%20%231.png")
