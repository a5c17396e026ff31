"""Perch application class.

Mutable during setup (mounts, middleware).  Frozen at runtime when
``app.run()``, lifespan startup, or ``__call__()`` first happens.
Freezing loads every configured catalog, so a broken manifest stops
the process before it serves anything.
"""

import logging
import threading

from anyio import to_thread

from perch._internal.asgi import ASGIApp, Receive, Scope, Send
from perch.assets.catalog import ResourceCatalog
from perch.assets.sources import ByteSource
from perch.config import AppConfig
from perch.errors import ConfigurationError
from perch.middleware.protocol import Middleware, Next
from perch.middleware.spa import SPAMounts
from perch.routing.mount import Mount
from perch.routing.router import MountRouter
from perch.server.handler import build_pipeline, handle_request

logger = logging.getLogger("perch.server")


class App:
    """The perch application: an ASGI app serving mounted SPA bundles.

    Usage::

        app = App(
            AppConfig(mounts=(load_descriptor("console.properties"),)),
            source=PackageSource("console_ui"),
        )
        app.mount("/docs", ResourceCatalog.load(DirectorySource("docs"), "checksums.csv"))

    Requests outside every mount go to *fallback* (another ASGI app) when
    one is given, otherwise they get a 404.

    Thread safety:
        The setup phase is single-threaded.  The freeze transition uses
        a Lock + double-check so exactly one thread loads catalogs and
        compiles the router, even if several workers call ``__call__()``
        concurrently on first request.
    """

    __slots__ = (
        "_catalogs",
        "_fallback",
        "_freeze_lock",
        "_frozen",
        "_middleware_list",
        "_pipeline",
        "_router",
        "_source",
        "config",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        source: ByteSource | None = None,
        fallback: ASGIApp | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._source = source
        self._fallback = fallback
        self._catalogs: list[tuple[str, ResourceCatalog]] = []
        self._middleware_list: list[Middleware] = []
        self._freeze_lock = threading.Lock()
        self._frozen = False

        # Set during _freeze()
        self._router: MountRouter | None = None
        self._pipeline: Next | None = None

    # -- Setup --

    def mount(self, path: str, catalog: ResourceCatalog) -> None:
        """Serve an already-loaded catalog under *path*."""
        self._check_not_frozen()
        self._catalogs.append((path, catalog))

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware around the mount dispatch.

        Middleware does not see requests forwarded to the fallback app.
        """
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    @property
    def router(self) -> MountRouter:
        """The compiled mount router (freezes the app if needed)."""
        self.freeze()
        assert self._router is not None
        return self._router

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start a pounce server for this app."""
        from perch.server.run import run_server

        run_server(
            self,
            host if host is not None else self.config.host,
            port if port is not None else self.config.port,
            reload=self.config.debug,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles the lifespan scope directly, forwards unmounted requests
        to the fallback app, and runs everything else through the
        middleware pipeline.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if not self._frozen:
            await to_thread.run_sync(self.freeze)
        assert self._router is not None
        assert self._pipeline is not None

        if self._fallback is not None and (
            scope["type"] != "http" or self._router.route(scope["path"]) is None
        ):
            await self._fallback(scope, receive, send)
            return

        await handle_request(scope, send, pipeline=self._pipeline, debug=self.config.debug)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup (before the first HTTP request), reading
        manifests in a worker thread, and reports ``lifespan.startup.failed`` when a catalog cannot load.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await to_thread.run_sync(self.freeze)
                except ConfigurationError as exc:
                    logger.error("Startup failed: %s", exc)
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def freeze(self) -> None:
        """Load catalogs and compile the router, once.

        Safe to call repeatedly and from several threads.  Errors from
        loading propagate and leave the app unfrozen.
        """
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        router = MountRouter()

        # 1. Configured descriptors need a byte source to load from
        if self.config.mounts and self._source is None:
            msg = "App(source=...) is required when AppConfig.mounts is set."
            raise ConfigurationError(msg)
        for mount_config in self.config.mounts:
            assert self._source is not None
            router.register(Mount.from_config(mount_config, self._source))

        # 2. Explicitly mounted catalogs
        for path, catalog in self._catalogs:
            router.register(Mount(path=path, catalog=catalog))

        router.compile()

        # 3. User middleware wraps the SPA mounts
        spa = SPAMounts(router, cache_control=self.config.cache_control)
        self._pipeline = build_pipeline((*self._middleware_list, spa))
        self._router = router
        self._frozen = True

        logger.info("Serving %d mount(s): %s", len(router), ", ".join(m.path for m in router.mounts))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register mounts and middleware before calling app.run()."
            )
            raise RuntimeError(msg)
