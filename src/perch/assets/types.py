"""Catalog value types."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Resource:
    """One servable file, as listed in a checksum manifest.

    ``path`` is the catalog key: POSIX-style, relative, no leading slash.
    ``etag`` is the build-time checksum, sent verbatim as a strong validator.
    """

    path: str
    content_type: str
    etag: str
