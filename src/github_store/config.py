import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

DEFAULT_API_URL = "https://api.github.com"


class ConfigError(RuntimeError):
    pass


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.environ.get(name, default)
    return val


def _split_origins(raw: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in str(raw).split(","))


@dataclass(frozen=True)
class RepoConfig:
    """Repository coordinates and credentials for the manifest store.

    Env:
      - GITHUB_TOKEN: bearer token with contents read/write access (required)
      - GH_OWNER, GH_REPO, GH_BRANCH: target repository and branch
      - MANIFEST_PATH: path of the manifest JSON inside the repository
      - CORS_ORIGIN: comma separated list of allowed origins ("*" for any)
      - GH_API_URL (optional): API root, for GitHub Enterprise
      - GH_TIMEOUT (optional): per-request timeout in seconds (default 30)
    """

    token: Optional[str] = None
    owner: str = "tngon462"
    repo: str = "slide"
    branch: str = "main"
    manifest_path: str = "slides/manifest.json"
    cors_origins: Tuple[str, ...] = field(default=("*",))
    api_url: str = DEFAULT_API_URL
    timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "RepoConfig":
        load_dotenv()
        return cls(
            token=_get_env("GITHUB_TOKEN") or None,
            owner=_get_env("GH_OWNER", "tngon462"),
            repo=_get_env("GH_REPO", "slide"),
            branch=_get_env("GH_BRANCH", "main"),
            manifest_path=_get_env("MANIFEST_PATH", "slides/manifest.json"),
            cors_origins=_split_origins(_get_env("CORS_ORIGIN", "*")),
            api_url=(_get_env("GH_API_URL", DEFAULT_API_URL) or DEFAULT_API_URL).rstrip("/"),
            timeout=float(_get_env("GH_TIMEOUT", "30")),
        )

    def require_token(self) -> str:
        if not self.token:
            raise ConfigError("GITHUB_TOKEN is not set")
        return self.token
