"""Byte sources: where manifests and asset bytes come from.

A *byte source* is anything that can hand back the bytes stored at a
logical path::

    source.fetch("webapp/", "assets/main.js")  # -> bytes | None

The logical path is ``namespace + relative_path``.  ``None`` means
"nothing there"; the catalog decides whether that is a startup error
(missing manifest) or a request failure (missing asset).

No base class required. The catalog checks the shape, not the lineage.
"""

from collections.abc import Mapping
from importlib import resources
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class ByteSource(Protocol):
    """Protocol for perch byte sources."""

    def fetch(self, namespace: str, relative_path: str) -> bytes | None: ...


def _segments(namespace: str, relative_path: str) -> list[str]:
    """Split a logical path into non-empty POSIX segments."""
    return [part for part in (namespace + relative_path).split("/") if part]


class DirectorySource:
    """Serve logical paths from a directory on disk.

    Security: resolves symlinks and verifies the final path is within
    the configured directory to prevent path traversal.
    """

    __slots__ = ("_root",)

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def fetch(self, namespace: str, relative_path: str) -> bytes | None:
        parts = _segments(namespace, relative_path)
        if not parts:
            return None
        file_path = self._root.joinpath(*parts).resolve()
        if not file_path.is_relative_to(self._root) or not file_path.is_file():
            return None
        return file_path.read_bytes()

    def __repr__(self) -> str:
        return f"DirectorySource({str(self._root)!r})"


class PackageSource:
    """Serve logical paths from files shipped inside an installed package.

    Lets each SPA bundle live in its own distribution, the way built
    front-end assets are usually vendored into a wheel::

        source = PackageSource("myapp_ui")
        source.fetch("dist/", "index.html")
    """

    __slots__ = ("_package",)

    def __init__(self, package: str) -> None:
        self._package = package

    def fetch(self, namespace: str, relative_path: str) -> bytes | None:
        parts = _segments(namespace, relative_path)
        if not parts or ".." in parts:
            return None
        try:
            package_root = resources.files(self._package)
        except ModuleNotFoundError:
            return None
        traversable = package_root.joinpath(*parts)
        if not traversable.is_file():
            return None
        return traversable.read_bytes()

    def __repr__(self) -> str:
        return f"PackageSource({self._package!r})"


class MappingSource:
    """Serve logical paths from an in-memory mapping.

    Keys are full logical paths (``namespace + relative_path``)::

        MappingSource({"ui/index.html": b"<!doctype html>"})
    """

    __slots__ = ("_files",)

    def __init__(self, files: Mapping[str, bytes]) -> None:
        self._files = dict(files)

    def fetch(self, namespace: str, relative_path: str) -> bytes | None:
        return self._files.get(namespace + relative_path)

    def __repr__(self) -> str:
        return f"MappingSource(<{len(self._files)} files>)"
