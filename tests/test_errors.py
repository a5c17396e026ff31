"""Tests for perch.errors and the lazy top-level exports."""

import pytest

import perch
from perch.errors import (
    ConfigurationError,
    HTTPError,
    ManifestError,
    ManifestNotFound,
    MethodNotAllowed,
    NotFound,
    PerchError,
    ResourceUnavailable,
)


class TestHierarchy:
    def test_manifest_errors_are_configuration_errors(self) -> None:
        assert issubclass(ManifestError, ConfigurationError)
        assert issubclass(ConfigurationError, PerchError)

    def test_resource_unavailable_is_not_configuration(self) -> None:
        assert not issubclass(ResourceUnavailable, ConfigurationError)
        assert issubclass(ResourceUnavailable, PerchError)

    def test_manifest_error_message(self) -> None:
        err = ManifestNotFound("ui/checksums.csv")
        assert str(err) == "manifest not found: ui/checksums.csv"
        assert err.detail == ""

    def test_manifest_error_with_detail(self) -> None:
        err = ManifestNotFound("ui/checksums.csv", "in MappingSource(<0 files>)")
        assert str(err) == "manifest not found: ui/checksums.csv (in MappingSource(<0 files>))"

    def test_resource_unavailable(self) -> None:
        err = ResourceUnavailable("webapp/main.js")
        assert err.location == "webapp/main.js"
        assert str(err) == "Resource not found: webapp/main.js"


class TestHTTPErrors:
    def test_not_found(self) -> None:
        err = NotFound()
        assert isinstance(err, HTTPError)
        assert err.status == 404
        assert str(err) == "404: Not Found"

    def test_method_not_allowed(self) -> None:
        err = MethodNotAllowed(frozenset({"HEAD", "GET"}))
        assert err.status == 405
        assert err.headers == (("Allow", "GET, HEAD"),)
        assert "Allowed methods: GET, HEAD" in err.detail

    def test_bare_status(self) -> None:
        assert str(HTTPError(status=418)) == "418"


class TestLazyExports:
    @pytest.mark.parametrize("name", perch.__all__)
    def test_every_export_resolves(self, name: str) -> None:
        assert getattr(perch, name) is not None

    def test_exports_are_the_real_objects(self) -> None:
        from perch.assets.catalog import ResourceCatalog

        assert perch.ResourceCatalog is ResourceCatalog
        assert perch.ConfigurationError is ConfigurationError

    def test_unknown_name(self) -> None:
        with pytest.raises(AttributeError, match="no attribute 'Nope'"):
            perch.Nope  # noqa: B018
