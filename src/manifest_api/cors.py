from __future__ import annotations

from typing import Sequence

from flask import Response

ALLOWED_METHODS = "GET,POST,PUT,DELETE,OPTIONS"
ALLOWED_HEADERS = "Content-Type, Authorization"


def resolve_allowed_origin(origins: Sequence[str], origin: str) -> str:
    """Echo ``origin`` when allowed, else fall back to the first configured origin."""
    allowed = [o for o in origins if o]
    if "*" in allowed or (origin and origin in allowed):
        return origin or "*"
    return allowed[0] if allowed else "*"


def apply_cors(response: Response, origins: Sequence[str], origin: str) -> Response:
    response.headers["Access-Control-Allow-Origin"] = resolve_allowed_origin(origins, origin)
    response.headers["Vary"] = "Origin"
    response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
    response.headers["Access-Control-Allow-Headers"] = ALLOWED_HEADERS
    return response
