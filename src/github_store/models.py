from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RemoteFile:
    path: str
    sha: str
    content: str = ""
    encoding: Optional[str] = None

    @classmethod
    def from_api(cls, payload: dict) -> "RemoteFile":
        return cls(
            path=payload.get("path", ""),
            sha=payload.get("sha", ""),
            content=payload.get("content") or "",
            encoding=payload.get("encoding"),
        )

    def decoded(self) -> bytes:
        encoding = (self.encoding or "").lower()
        if encoding == "base64":
            # the contents API wraps base64 payloads at 60 columns
            return base64.b64decode(self.content)
        if encoding in ("", "utf-8", "utf8"):
            return self.content.encode("utf-8")
        raise ValueError(f"Unsupported content encoding '{self.encoding}' for {self.path}")

    def text(self) -> str:
        return self.decoded().decode("utf-8")
