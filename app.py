import logging
import os
from typing import Callable, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify, make_response, request

from src.github_store import RepoConfig, RepoFileClient
from src.manifest_api import get_blueprint
from src.manifest_api.cors import apply_cors

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_PORT = int(os.environ.get("FLASK_PORT", "5000"))
DEFAULT_HOST = os.environ.get("FLASK_HOST", "127.0.0.1")


def create_app(
    config: Optional[RepoConfig] = None,
    client_factory: Optional[Callable[[RepoConfig], RepoFileClient]] = None,
) -> Flask:
    """Build the manifest app.

    ``config`` defaults to the environment, read once here rather than per
    request. ``client_factory`` lets callers swap the GitHub client.
    """
    app = Flask(__name__)
    app.config["REPO_CONFIG"] = config or RepoConfig.from_env()
    app.config["REPO_CLIENT_FACTORY"] = client_factory
    app.register_blueprint(get_blueprint())

    # werkzeug rejects methods the route does not list before the view runs
    @app.errorhandler(405)
    def method_not_allowed(_exc):
        response = make_response(jsonify({"error": "Method not allowed"}), 405)
        return apply_cors(
            response,
            app.config["REPO_CONFIG"].cors_origins,
            request.headers.get("Origin", ""),
        )

    cfg = app.config["REPO_CONFIG"]
    if not cfg.token:
        logger.warning("GITHUB_TOKEN is not set; manifest requests will fail with 500")
    logger.info(
        "Serving %s from %s/%s@%s", cfg.manifest_path, cfg.owner, cfg.repo, cfg.branch
    )
    return app


# WSGI entry point, e.g. `gunicorn app:app`
app = create_app()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(host=DEFAULT_HOST, port=DEFAULT_PORT, debug=True)
