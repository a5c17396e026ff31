"""SPA mount middleware.

Serves every request whose path falls under a registered mount from
that mount's catalog: known files as-is, everything else as the index
document so the client-side router can take over.  Paths outside all
mounts fall through to the next handler.

Byte reads are blocking, so the catalog lookup and conditional GET run
in a worker thread.
"""

import logging

from anyio import to_thread

from perch.errors import MethodNotAllowed
from perch.http.conditional import to_response
from perch.http.request import Request
from perch.http.response import Response
from perch.middleware.protocol import Next
from perch.routing.router import MountRouter

logger = logging.getLogger("perch.server")

SERVABLE_METHODS = frozenset({"GET", "HEAD"})


class SPAMounts:
    """Middleware that serves mounted SPA bundles.

    Usage::

        router = MountRouter()
        router.register(Mount("/console", console_catalog))
        router.register(Mount("/console/admin", admin_catalog))

        app.add_middleware(SPAMounts(router))

    ``GET`` and ``HEAD`` are served.  Any other method on a mounted path
    raises ``MethodNotAllowed``.
    """

    __slots__ = ("_cache_control", "_router")

    def __init__(self, router: MountRouter, *, cache_control: str | None = None) -> None:
        self._router = router
        self._cache_control = cache_control

    async def __call__(self, request: Request, next: Next) -> Response:
        """Serve from the matching mount or fall through."""
        match = self._router.route(request.path)
        if match is None:
            return await next(request)

        if request.method not in SERVABLE_METHODS:
            raise MethodNotAllowed(SERVABLE_METHODS)

        catalog = match.mount.catalog
        outcome = await to_thread.run_sync(
            catalog.serve, match.remainder, request.if_none_match
        )
        logger.debug("%s %s -> mount %s", request.method, request.path, match.mount.path)

        response = to_response(outcome)
        if self._cache_control is not None:
            response = response.with_header("Cache-Control", self._cache_control)
        return response
