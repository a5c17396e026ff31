"""Error handling pipeline for perch requests.

Maps HTTPError exceptions and unexpected failures to plain-text
Responses.  Internal failures never leak paths or tracebacks to the
client; they go to the ``perch.server`` log instead.
"""

import logging

from perch.errors import HTTPError, ResourceUnavailable
from perch.http.request import Request
from perch.http.response import Response

logger = logging.getLogger("perch.server")


def handle_http_error(exc: HTTPError, request: Request, *, debug: bool = False) -> Response:
    """Map an HTTPError to a Response."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"

    resp = Response(body=detail, status=exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp


def handle_internal_error(exc: Exception, request: Request) -> Response:
    """Handle unexpected exceptions as 500 errors."""
    if isinstance(exc, ResourceUnavailable):
        # Packaging mismatch: the manifest lists a file the source lacks.
        logger.error(
            "500 %s %s: %s is listed in the manifest but missing",
            request.method,
            request.path,
            exc.location,
        )
    else:
        logger.exception("500 %s %s", request.method, request.path)
    return Response(body="Internal Server Error", status=500)
