"""Resource catalogs: manifests, MIME types, and byte sources.

Typical usage::

    from perch.assets import DirectorySource, ResourceCatalog

    catalog = ResourceCatalog.load(DirectorySource("build"), "checksums.csv")
"""

from perch.assets.catalog import ResourceCatalog
from perch.assets.content_types import CONTENT_TYPES, content_type_for
from perch.assets.manifest import iter_manifest, parse_manifest
from perch.assets.sources import ByteSource, DirectorySource, MappingSource, PackageSource
from perch.assets.types import Resource

__all__ = [
    "CONTENT_TYPES",
    "ByteSource",
    "DirectorySource",
    "MappingSource",
    "PackageSource",
    "Resource",
    "ResourceCatalog",
    "content_type_for",
    "iter_manifest",
    "parse_manifest",
]
