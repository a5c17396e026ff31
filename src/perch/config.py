"""Application and mount configuration.

AppConfig and MountConfig are frozen dataclasses, immutable after
creation, IDE-autocompletable, no string-key dict lookups.

Mount descriptors can also be written as Java-style ``.properties``
files, one per mounted application::

    path=/console
    checksumsFileResourcePath=console/checksums.csv
    resourceRoot=console/
    indexHtmlRelativePath=index.html
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from perch.errors import ConfigurationError

# Descriptor key -> MountConfig field
DESCRIPTOR_KEYS: dict[str, str] = {
    "path": "path",
    "checksumsFileResourcePath": "checksums_file_resource_path",
    "resourceRoot": "resource_root",
    "indexHtmlRelativePath": "index_html_relative_path",
}


@dataclass(frozen=True, slots=True)
class MountConfig:
    """One mounted SPA bundle. Immutable after creation.

    All paths except ``path`` are logical paths inside the app's byte
    source.  ``checksums_file_resource_path`` is absolute in the source;
    asset bytes are read from ``resource_root + <manifest path>``.
    """

    path: str
    checksums_file_resource_path: str
    resource_root: str
    index_html_relative_path: str = "index.html"

    @classmethod
    def from_properties(cls, props: Mapping[str, str], *, source: str = "<memory>") -> MountConfig:
        """Build a MountConfig from descriptor properties.

        Every key in ``DESCRIPTOR_KEYS`` is required.

        Raises:
            ConfigurationError: A required key is missing.
        """
        values: dict[str, str] = {}
        for key, field_name in DESCRIPTOR_KEYS.items():
            value = props.get(key)
            if value is None:
                msg = f"Missing required property: {key} (in {source})"
                raise ConfigurationError(msg)
            values[field_name] = value
        return cls(**values)


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(
            port=3000,
            mounts=(load_descriptor("console.properties"),),
        )
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    log_level: str = "info"

    # Mounted applications, loaded eagerly when the app freezes
    mounts: tuple[MountConfig, ...] = ()

    # Sent on 200 and 304 asset responses when set (e.g. "no-cache")
    cache_control: str | None = None


def parse_properties(text: str) -> dict[str, str]:
    """Parse the subset of the ``.properties`` format descriptors use.

    Supports ``key=value``, ``key: value`` and ``key value`` lines,
    ``#`` and ``!`` comments, and surrounding whitespace.  Line
    continuations and unicode escapes are not supported.  Later keys
    override earlier ones.
    """
    props: dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line[0] in "#!":
            continue

        split_at = len(line)
        for i, ch in enumerate(line):
            if ch in "=:" or ch.isspace():
                split_at = i
                break

        key = line[:split_at]
        rest = line[split_at:].lstrip()
        if rest[:1] in ("=", ":"):
            rest = rest[1:].lstrip()
        props[key] = rest
    return props


def load_descriptor(path: str | Path) -> MountConfig:
    """Read a ``.properties`` mount descriptor from disk.

    Raises:
        ConfigurationError: The file is missing or a required key is absent.
    """
    descriptor = Path(path)
    try:
        text = descriptor.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        msg = f"Mount descriptor not found: {descriptor}"
        raise ConfigurationError(msg) from exc
    return MountConfig.from_properties(parse_properties(text), source=str(descriptor))
