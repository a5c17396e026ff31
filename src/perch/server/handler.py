"""ASGI handler: translates ASGI scope/messages to perch types.

The only component that touches raw ASGI request scopes directly.
Converts the scope to a typed Request, dispatches through the
middleware pipeline, and sends the Response back through ASGI send().
"""

from collections.abc import Callable
from typing import Any

from perch._internal.asgi import Scope, Send
from perch.errors import HTTPError, NotFound
from perch.http.request import Request
from perch.http.response import Response
from perch.middleware.protocol import Next
from perch.server.errors import handle_http_error, handle_internal_error
from perch.server.sender import send_response


async def _dispatch(request: Request) -> Response:
    """Innermost handler: reached only when no mount claimed the path."""
    raise NotFound(f"No mount matches {request.path!r}")


def build_pipeline(middleware: tuple[Callable[..., Any], ...]) -> Next:
    """Wrap the middleware tuple around the innermost dispatch.

    The first middleware in the tuple is the outermost.
    """
    handler: Next = _dispatch
    for mw in reversed(middleware):
        outer = handler

        async def make_next(req: Request, _mw: Any = mw, _next: Next = outer) -> Response:
            return await _mw(req, _next)

        handler = make_next
    return handler


async def handle_request(
    scope: Scope,
    send: Send,
    *,
    pipeline: Next,
    debug: bool = False,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] == "websocket":
        # Closing before accept rejects the handshake.
        await send({"type": "websocket.close", "code": 1000})
        return
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    try:
        response = await pipeline(request)
    except HTTPError as exc:
        response = handle_http_error(exc, request, debug=debug)
    except Exception as exc:
        response = handle_internal_error(exc, request)

    await send_response(response, send, head=request.method == "HEAD")
