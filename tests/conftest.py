"""Shared fixtures: small SPA bundles in memory and on disk."""

from collections.abc import Callable
from pathlib import Path

import pytest

from perch.assets.catalog import ResourceCatalog
from perch.assets.sources import MappingSource

INDEX_HTML = b"<!doctype html><h1>Console</h1>"
MAIN_JS = b"console.log('console');"
STYLE_CSS = b"body { margin: 0; }"


@pytest.fixture
def source() -> MappingSource:
    """One bundle under ``ui/`` with its manifest at the source root."""
    return MappingSource(
        {
            "checksums.csv": b"# generated at build time\nindex.html,t-index\nmain.js,t-main\n",
            "ui/index.html": INDEX_HTML,
            "ui/main.js": MAIN_JS,
        }
    )


@pytest.fixture
def catalog(source: MappingSource) -> ResourceCatalog:
    return ResourceCatalog.load(source, "checksums.csv", resource_root="ui/")


@pytest.fixture
def make_catalog() -> Callable[[str], ResourceCatalog]:
    """Build a one-page catalog whose index body names the bundle."""

    def factory(name: str) -> ResourceCatalog:
        source = MappingSource(
            {
                f"{name}/checksums.csv": f"index.html,{name}-index\n".encode(),
                f"{name}/dist/index.html": f"<h1>{name}</h1>".encode(),
            }
        )
        return ResourceCatalog.load(
            source, f"{name}/checksums.csv", resource_root=f"{name}/dist/"
        )

    return factory


@pytest.fixture
def bundle_dir(tmp_path: Path) -> Path:
    """An on-disk bundle laid out the way a build would produce it."""
    root = tmp_path / "bundle"
    webapp = root / "webapp"
    (webapp / "assets").mkdir(parents=True)

    (webapp / "index.html").write_bytes(INDEX_HTML)
    (webapp / "main.js").write_bytes(MAIN_JS)
    (webapp / "assets" / "style.css").write_bytes(STYLE_CSS)

    (root / "checksums.csv").write_text(
        "# path,checksum\n"
        "\n"
        "index.html,aaa111\n"
        "main.js,bbb222\n"
        "assets/style.css,ccc333\n"
    )
    return root


@pytest.fixture
def descriptor(bundle_dir: Path) -> Path:
    """A mount descriptor for ``bundle_dir`` mounted at ``/console``."""
    path = bundle_dir / "console.properties"
    path.write_text(
        "# console UI\n"
        "path=/console\n"
        "checksumsFileResourcePath=checksums.csv\n"
        "resourceRoot=webapp/\n"
        "indexHtmlRelativePath=index.html\n"
    )
    return path
