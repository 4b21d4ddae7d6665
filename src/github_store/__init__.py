from .client import RemoteAPIError, RepoFileClient, build_session
from .config import ConfigError, RepoConfig
from .models import RemoteFile

__all__ = [
    "ConfigError",
    "RemoteAPIError",
    "RemoteFile",
    "RepoConfig",
    "RepoFileClient",
    "build_session",
]
