"""Perch: serve single-page applications from checksum manifests.

Each mounted bundle is described by a build-time manifest of
``path,checksum`` lines.  Known files are served with the checksum as a
strong ETag; every other path under the mount gets the index document,
so the client-side router owns the URL space.

Basic usage::

    from perch import App, DirectorySource, ResourceCatalog

    app = App()
    app.mount("/", ResourceCatalog.load(DirectorySource("dist"), "checksums.csv"))
    app.run()

Several bundles in one process, longest prefix first::

    from perch import App, AppConfig, PackageSource, load_descriptor

    app = App(
        AppConfig(mounts=(
            load_descriptor("console.properties"),   # path=/console
            load_descriptor("admin.properties"),     # path=/console/admin
        )),
        source=PackageSource("myorg_ui"),
    )
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "DirectorySource",
    "HTTPError",
    "ManifestError",
    "MappingSource",
    "Mount",
    "MountConfig",
    "MountRouter",
    "NotFound",
    "PackageSource",
    "PerchError",
    "Request",
    "Resource",
    "ResourceCatalog",
    "ResourceUnavailable",
    "Response",
    "load_descriptor",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name == "App":
        from perch.app import App

        return App

    if name in ("AppConfig", "MountConfig", "load_descriptor"):
        import perch.config

        return getattr(perch.config, name)

    if name in ("Resource", "ResourceCatalog", "DirectorySource", "MappingSource", "PackageSource"):
        import perch.assets

        return getattr(perch.assets, name)

    if name in ("Mount", "MountRouter"):
        import perch.routing

        return getattr(perch.routing, name)

    if name == "Request":
        from perch.http.request import Request

        return Request

    if name == "Response":
        from perch.http.response import Response

        return Response

    if name in (
        "ConfigurationError",
        "HTTPError",
        "ManifestError",
        "NotFound",
        "PerchError",
        "ResourceUnavailable",
    ):
        import perch.errors

        return getattr(perch.errors, name)

    msg = f"module 'perch' has no attribute {name!r}"
    raise AttributeError(msg)
