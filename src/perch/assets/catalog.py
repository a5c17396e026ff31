"""Resource catalog: one SPA bundle's manifest, frozen at load time.

Loading reads the checksum manifest once from a byte source and checks
that the index document is listed.  After that the catalog is read-only:
lookups take no locks because nothing mutates.

Unknown paths are not errors.  They resolve to the index document so
the client-side router can handle them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from perch.assets.manifest import parse_manifest
from perch.assets.sources import ByteSource
from perch.assets.types import Resource
from perch.errors import (
    ManifestNotFound,
    MissingRootResource,
    ResourceUnavailable,
    UnreadableManifest,
)
from perch.http.conditional import Outcome, conditional_response

logger = logging.getLogger("perch.assets")


class ResourceCatalog:
    """An immutable ``path -> Resource`` mapping plus its fallback document.

    Usage::

        catalog = ResourceCatalog.load(
            DirectorySource("./build"),
            "checksums.csv",
            resource_root="webapp/",
            index="index.html",
        )
        catalog.resolve("/does/not/exist")  # -> the index.html Resource
    """

    __slots__ = ("_index", "_resource_root", "_resources", "_source")

    def __init__(
        self,
        resources: Mapping[str, Resource],
        *,
        source: ByteSource,
        resource_root: str = "",
        index: str = "index.html",
        manifest: str = "<memory>",
    ) -> None:
        if index not in resources:
            raise MissingRootResource(manifest, resource_root + index)
        self._resources = MappingProxyType(dict(resources))
        self._source = source
        self._resource_root = resource_root
        self._index = index

    @classmethod
    def load(
        cls,
        source: ByteSource,
        manifest: str,
        *,
        resource_root: str = "",
        index: str = "index.html",
    ) -> ResourceCatalog:
        """Read and validate the manifest at *manifest* in *source*.

        The manifest path is absolute within the source; it is not
        prefixed with *resource_root*.

        Raises:
            ManifestNotFound: The source has nothing at *manifest*.
            UnreadableManifest: The read failed or the bytes are not UTF-8.
            MalformedManifestLine: See ``perch.assets.manifest``.
            UnresolvableContentType: See ``perch.assets.manifest``.
            DuplicateResource: A path is listed twice.
            MissingRootResource: *index* is not listed.
        """
        try:
            raw = source.fetch("", manifest)
        except OSError as exc:
            raise UnreadableManifest(manifest, str(exc)) from exc
        if raw is None:
            raise ManifestNotFound(manifest, f"in {source!r}")

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise UnreadableManifest(manifest, "not valid UTF-8") from exc

        resources = parse_manifest(text, manifest)
        catalog = cls(
            resources,
            source=source,
            resource_root=resource_root,
            index=index,
            manifest=manifest,
        )
        logger.info(
            "Loaded %d resources from %s (root=%r, index=%r)",
            len(resources),
            manifest,
            resource_root,
            index,
        )
        return catalog

    # -- Lookup --

    @property
    def index(self) -> Resource:
        """The fallback document."""
        return self._resources[self._index]

    @property
    def resource_root(self) -> str:
        return self._resource_root

    @property
    def resources(self) -> Mapping[str, Resource]:
        return self._resources

    def resolve(self, path: str) -> Resource:
        """Return the resource for *path*, or the index document.

        ``""`` and ``"/"`` name the index document; a single leading
        slash is ignored.  Never raises.
        """
        if path.startswith("/"):
            path = path[1:]
        if not path:
            return self.index
        return self._resources.get(path) or self.index

    # -- Bytes --

    def fetch_bytes(self, resource: Resource) -> bytes:
        """Read *resource*'s bytes from the byte source.

        Raises:
            ResourceUnavailable: The manifest lists the file but the
                source cannot produce it.
        """
        data = self._source.fetch(self._resource_root, resource.path)
        if data is None:
            raise ResourceUnavailable(self._resource_root + resource.path)
        return data

    def serve(self, path: str, if_none_match: str | None = None) -> Outcome:
        """Resolve *path* and run the conditional GET against it."""
        return conditional_response(self.resolve(path), if_none_match, self.fetch_bytes)

    # -- Mapping-ish helpers --

    def __contains__(self, path: object) -> bool:
        return path in self._resources

    def __iter__(self) -> Iterator[Resource]:
        return iter(self._resources.values())

    def __len__(self) -> int:
        return len(self._resources)

    def __repr__(self) -> str:
        return (
            f"ResourceCatalog(<{len(self)} resources>, root={self._resource_root!r}, "
            f"index={self._index!r})"
        )
