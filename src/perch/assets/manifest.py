"""Checksum manifest parsing.

A manifest is generated at build time, one asset per line::

    # comment lines start with '#', blank lines are ignored
    index.html,3f1c9a0e
    assets/main.js,77b2d41c

Each data line is split on every comma and must yield exactly two
non-empty fields.  There is no escaping: a path containing a comma
cannot be listed and is reported as a malformed line.
"""

from collections.abc import Iterator

from perch.assets.content_types import content_type_for
from perch.assets.types import Resource
from perch.errors import (
    DuplicateResource,
    MalformedManifestLine,
    UnresolvableContentType,
)


def iter_manifest(text: str, manifest: str) -> Iterator[Resource]:
    """Yield one ``Resource`` per data line of *text*.

    *manifest* names the manifest location in error messages.

    Raises:
        MalformedManifestLine: A data line without exactly two fields.
        UnresolvableContentType: A path whose extension has no MIME type.
    """
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        fields = line.split(",")
        if len(fields) != 2 or not all(fields):
            raise MalformedManifestLine(manifest, line, lineno)

        path, etag = fields
        content_type = content_type_for(path)
        if content_type is None:
            raise UnresolvableContentType(manifest, path)

        yield Resource(path=path, content_type=content_type, etag=etag)


def parse_manifest(text: str, manifest: str) -> dict[str, Resource]:
    """Parse a whole manifest into a ``path -> Resource`` dict.

    Raises the ``iter_manifest`` errors, plus ``DuplicateResource`` when
    a path is listed more than once.
    """
    entries: dict[str, Resource] = {}
    for resource in iter_manifest(text, manifest):
        if resource.path in entries:
            raise DuplicateResource(manifest, resource.path)
        entries[resource.path] = resource
    return entries
