"""Per-request state handed to the dispatch layer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Request:
    method: str
    path: str
    raw_query: str = ""
    body: bytes = b""

    def resource_id(self, collection: str) -> str:
        """Return the path suffix below ``collection`` ("" for the collection itself)."""
        if self.path == collection:
            return ""
        return self.path[len(collection):].lstrip("/")
