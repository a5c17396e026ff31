"""Strong-validator conditional GET.

The one piece of protocol logic every mount shares: compare the
request's ``If-None-Match`` value to the resource's ETag and either
answer ``304 Not Modified`` or read the bytes and answer ``200``.

Comparison is an exact string match.  There is no weak comparison,
no ``*`` wildcard and no comma-separated list handling.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from perch.http.response import Response

if TYPE_CHECKING:
    from perch.assets.types import Resource


@dataclass(frozen=True, slots=True)
class NotModified:
    """The client's cached copy is current. No body."""

    etag: str


@dataclass(frozen=True, slots=True)
class Ok:
    """Full response: the resource's bytes and its validators."""

    body: bytes
    content_type: str
    etag: str


Outcome: TypeAlias = NotModified | Ok


def conditional_response(
    resource: Resource,
    if_none_match: str | None,
    fetch: Callable[[Resource], bytes],
) -> Outcome:
    """Decide between 304 and 200 for *resource*.

    *fetch* is only called on the 200 path, so a matching validator never
    touches the byte source.
    """
    if if_none_match == resource.etag:
        return NotModified(etag=resource.etag)
    return Ok(body=fetch(resource), content_type=resource.content_type, etag=resource.etag)


def to_response(outcome: Outcome) -> Response:
    """Translate an outcome into a ``Response`` the ASGI sender understands."""
    if isinstance(outcome, NotModified):
        return Response(status=304, content_type="").with_header("ETag", outcome.etag)
    return Response(body=outcome.body, content_type=outcome.content_type).with_header(
        "ETag", outcome.etag
    )
