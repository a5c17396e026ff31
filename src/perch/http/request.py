"""Immutable HTTP request.

Frozen metadata only.  Static assets never read a request body, so the
ASGI ``receive`` callable is not kept.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Header names are lower-cased; when a header is sent more than once
    the first value wins.
    """

    method: str
    path: str
    headers: Mapping[str, str]
    http_version: str = "1.1"
    client: tuple[str, int] | None = None

    @property
    def if_none_match(self) -> str | None:
        """The raw ``If-None-Match`` header value, or ``None`` if absent."""
        return self.headers.get("if-none-match")

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        headers: dict[str, str] = {}
        for raw_name, raw_value in scope.get("headers", ()):
            name = raw_name.decode("latin-1").lower()
            headers.setdefault(name, raw_value.decode("latin-1"))
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=MappingProxyType(headers),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
        )
