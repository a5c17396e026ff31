"""Tests for perch.assets.catalog: loading, resolution, and byte access."""

import logging

import pytest

from perch.assets.catalog import ResourceCatalog
from perch.assets.sources import MappingSource, PackageSource
from perch.assets.types import Resource
from perch.errors import (
    ConfigurationError,
    ManifestNotFound,
    MissingRootResource,
    ResourceUnavailable,
    UnreadableManifest,
    UnresolvableContentType,
)
from perch.http.conditional import NotModified, Ok

from conftest import INDEX_HTML, MAIN_JS


class TestLoad:
    def test_loads_entries(self, catalog: ResourceCatalog) -> None:
        assert len(catalog) == 2
        assert "index.html" in catalog
        assert "main.js" in catalog
        assert catalog.resource_root == "ui/"

    def test_index_resource(self, catalog: ResourceCatalog) -> None:
        assert catalog.index == Resource(
            path="index.html", content_type="text/html", etag="t-index"
        )

    def test_iterates_resources(self, catalog: ResourceCatalog) -> None:
        assert {r.path for r in catalog} == {"index.html", "main.js"}

    def test_mapping_is_read_only(self, catalog: ResourceCatalog) -> None:
        with pytest.raises(TypeError):
            catalog.resources["evil.js"] = catalog.index  # type: ignore[index]

    def test_manifest_not_found(self) -> None:
        with pytest.raises(ManifestNotFound) as exc_info:
            ResourceCatalog.load(MappingSource({}), "missing.csv")
        assert "manifest not found" in str(exc_info.value)
        assert "missing.csv" in str(exc_info.value)

    def test_missing_root_resource(self) -> None:
        source = MappingSource({"checksums.csv": b"main.js,t1\n"})
        with pytest.raises(MissingRootResource) as exc_info:
            ResourceCatalog.load(source, "checksums.csv", index="index.html")
        assert exc_info.value.index == "index.html"
        assert "missing root resource" in str(exc_info.value)

    def test_custom_index(self) -> None:
        source = MappingSource({"checksums.csv": b"app.html,t1\n"})
        catalog = ResourceCatalog.load(source, "checksums.csv", index="app.html")
        assert catalog.resolve("/anything").path == "app.html"

    def test_manifest_errors_propagate(self) -> None:
        source = MappingSource({"checksums.csv": b"index.html,t1\ndata.bin,t2\n"})
        with pytest.raises(UnresolvableContentType):
            ResourceCatalog.load(source, "checksums.csv")

    def test_manifest_not_utf8(self) -> None:
        source = MappingSource({"checksums.csv": b"index.html,\xff\n"})
        with pytest.raises(UnreadableManifest) as exc_info:
            ResourceCatalog.load(source, "checksums.csv")
        assert isinstance(exc_info.value, ConfigurationError)
        assert "not valid UTF-8" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_manifest_read_error(self) -> None:
        class BrokenSource:
            def fetch(self, namespace: str, relative_path: str) -> bytes | None:
                raise PermissionError("permission denied")

        with pytest.raises(UnreadableManifest, match="permission denied"):
            ResourceCatalog.load(BrokenSource(), "checksums.csv")

    def test_package_not_installed(self) -> None:
        with pytest.raises(ManifestNotFound):
            ResourceCatalog.load(PackageSource("perch_missing_ui_bundle"), "checksums.csv")

    def test_manifest_not_prefixed_with_resource_root(self, source: MappingSource) -> None:
        catalog = ResourceCatalog.load(source, "checksums.csv", resource_root="ui/")
        assert catalog.fetch_bytes(catalog.index) == INDEX_HTML

    def test_constructor_checks_index(self) -> None:
        resource = Resource(path="main.js", content_type="text/javascript", etag="t")
        with pytest.raises(MissingRootResource):
            ResourceCatalog({"main.js": resource}, source=MappingSource({}))

    def test_logs_load(self, source: MappingSource, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="perch.assets"):
            ResourceCatalog.load(source, "checksums.csv", resource_root="ui/")
        assert "Loaded 2 resources from checksums.csv" in caplog.text


class TestResolve:
    def test_empty_path_is_index(self, catalog: ResourceCatalog) -> None:
        assert catalog.resolve("") is catalog.index

    def test_root_is_index(self, catalog: ResourceCatalog) -> None:
        assert catalog.resolve("/") is catalog.index

    def test_unknown_path_is_index(self, catalog: ResourceCatalog) -> None:
        assert catalog.resolve("settings/profile") is catalog.index
        assert catalog.resolve("/settings/profile") is catalog.index

    def test_known_path(self, catalog: ResourceCatalog) -> None:
        assert catalog.resolve("main.js").etag == "t-main"

    @pytest.mark.parametrize("path", ["index.html", "main.js"])
    def test_leading_slash_ignored(self, catalog: ResourceCatalog, path: str) -> None:
        assert catalog.resolve(path) == catalog.resolve("/" + path)

    def test_lookup_is_exact(self, catalog: ResourceCatalog) -> None:
        assert catalog.resolve("MAIN.JS") is catalog.index
        assert catalog.resolve("main.js/") is catalog.index


class TestFetchBytes:
    def test_reads_under_resource_root(self, catalog: ResourceCatalog) -> None:
        assert catalog.fetch_bytes(catalog.resolve("main.js")) == MAIN_JS

    def test_missing_bytes(self) -> None:
        source = MappingSource({"checksums.csv": b"index.html,t1\nghost.js,t2\n"})
        catalog = ResourceCatalog.load(source, "checksums.csv", resource_root="ui/")
        with pytest.raises(ResourceUnavailable) as exc_info:
            catalog.fetch_bytes(catalog.resolve("ghost.js"))
        assert exc_info.value.location == "ui/ghost.js"

    def test_failure_does_not_invalidate_entry(self) -> None:
        files = {"checksums.csv": b"index.html,t1\n"}
        source = MappingSource(files)
        catalog = ResourceCatalog.load(source, "checksums.csv")
        with pytest.raises(ResourceUnavailable):
            catalog.fetch_bytes(catalog.index)
        assert "index.html" in catalog


class TestServe:
    def test_not_modified(self, catalog: ResourceCatalog) -> None:
        assert catalog.serve("main.js", "t-main") == NotModified(etag="t-main")

    def test_ok(self, catalog: ResourceCatalog) -> None:
        outcome = catalog.serve("/main.js", None)
        assert outcome == Ok(body=MAIN_JS, content_type="text/javascript", etag="t-main")

    def test_fallback_uses_index_validator(self, catalog: ResourceCatalog) -> None:
        assert catalog.serve("deep/link", "t-index") == NotModified(etag="t-index")
        outcome = catalog.serve("deep/link", "t-main")
        assert isinstance(outcome, Ok)
        assert outcome.body == INDEX_HTML
