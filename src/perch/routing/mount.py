"""Mount and MountMatch frozen dataclasses."""

from __future__ import annotations

from dataclasses import dataclass

from perch.assets.catalog import ResourceCatalog
from perch.assets.sources import ByteSource
from perch.config import MountConfig
from perch.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class Mount:
    """A resource catalog bound to a URL prefix.

    Created during app setup, registered with the router before it
    compiles.  ``path`` must start with ``/``; it is matched as a
    literal string prefix of the request path.
    """

    path: str
    catalog: ResourceCatalog
    name: str | None = None

    def __post_init__(self) -> None:
        if not self.path.startswith("/"):
            msg = f"Mount path must start with '/': {self.path!r}"
            raise ConfigurationError(msg)

    @classmethod
    def from_config(cls, config: MountConfig, source: ByteSource) -> Mount:
        """Load the catalog a descriptor points at and bind it to its path.

        Manifest errors propagate; nothing is skipped.
        """
        catalog = ResourceCatalog.load(
            source,
            config.checksums_file_resource_path,
            resource_root=config.resource_root,
            index=config.index_html_relative_path,
        )
        return cls(path=config.path, catalog=catalog)


@dataclass(frozen=True, slots=True)
class MountMatch:
    """Result of a successful prefix match.

    ``remainder`` is the request path with the mount prefix removed and
    any leading slash stripped, ready for ``ResourceCatalog.resolve``.
    """

    mount: Mount
    remainder: str
