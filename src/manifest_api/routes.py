"""Flask blueprint serving the slide manifest over GET/PUT."""

from __future__ import annotations

import logging

from flask import Blueprint, Response, current_app, jsonify, make_response, request

from src.github_store import ConfigError, RepoConfig, RepoFileClient
from src.manifest import SCHEMA, ManifestService, ManifestValidationError

from .cors import apply_cors

logger = logging.getLogger(__name__)

HANDLED_METHODS = ["GET", "PUT", "POST", "DELETE", "PATCH", "OPTIONS"]

manifest_bp = Blueprint("manifest", __name__)


def _repo_config() -> RepoConfig:
    return current_app.config["REPO_CONFIG"]


def _build_service(config: RepoConfig) -> ManifestService:
    client_factory = current_app.config.get("REPO_CLIENT_FACTORY") or RepoFileClient
    client = client_factory(config)
    return ManifestService(client, config.manifest_path, config.branch)


def _error(message: str, status: int) -> Response:
    return make_response(jsonify({"error": message}), status)


def _fetch(service: ManifestService) -> Response:
    items = service.fetch()
    return jsonify({"items": [item.to_dict() for item in items], "schema": SCHEMA})


def _replace(service: ManifestService) -> Response:
    payload = request.get_json(force=True, silent=True)
    if not isinstance(payload, dict):
        payload = {}
    result = service.replace(
        payload.get("items"),
        delete_files=bool(payload.get("delete_files", False)),
    )
    return jsonify(result.to_response())


def _dispatch() -> Response:
    config = _repo_config()
    try:
        config.require_token()
    except ConfigError as exc:
        logger.error("Manifest endpoint misconfigured: %s", exc)
        return _error(str(exc), 500)

    if request.method == "OPTIONS":
        return make_response("", 200)
    if request.method not in ("GET", "PUT"):
        return _error("Method not allowed", 405)

    try:
        service = _build_service(config)
        if request.method == "GET":
            return _fetch(service)
        return _replace(service)
    except ManifestValidationError as exc:
        return _error(str(exc), 400)
    except Exception as exc:
        logger.exception("Manifest %s failed", request.method)
        return _error(str(exc), 500)


@manifest_bp.route("/", defaults={"path": ""}, methods=HANDLED_METHODS)
@manifest_bp.route("/<path:path>", methods=HANDLED_METHODS)
def manifest_endpoint(path: str):
    response = _dispatch()
    return apply_cors(response, _repo_config().cors_origins, request.headers.get("Origin", ""))


__all__ = ["manifest_bp"]
