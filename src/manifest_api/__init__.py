"""Manifest HTTP API package."""

from __future__ import annotations

from importlib import import_module
from typing import Any


def get_blueprint() -> Any:
    """Import lazily so the app module can configure logging first."""
    routes = import_module("src.manifest_api.routes")
    return routes.manifest_bp


__all__ = ["get_blueprint"]
