"""Turning exceptions that escape the chain into responses.

The core never catches handler failures; this is the transport side
of that contract. ``HTTPError`` keeps its status, anything else is a 500.
"""

import logging
import traceback

from wren.errors import HTTPError
from wren.http.request import Request
from wren.http.response import Response

logger = logging.getLogger("wren.server")


def http_error_response(exc: HTTPError, request: Request, debug: bool) -> Response:
    """Map a deliberate ``HTTPError`` to a plain-text response."""
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    body = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        body = f"{exc.status}: {exc.detail}"
    response = Response(status=exc.status, body=body)
    response.set_header("Content-Type", "text/plain; charset=utf-8")
    for name, value in exc.headers:
        response.set_header(name, value)
    return response


def internal_error_response(exc: Exception, request: Request, debug: bool) -> Response:
    """Log an unexpected failure and answer 500.

    In debug mode the body carries the formatted traceback.
    """
    logger.exception("500 %s %s", request.method, request.path)
    body = "Internal Server Error"
    if debug:
        body = "".join(traceback.format_exception(exc))
    response = Response(status=500, body=body)
    response.set_header("Content-Type", "text/plain; charset=utf-8")
    return response


def payload_too_large_response(request: Request) -> Response:
    """Answer 413 for a body refused before the chain runs."""
    logger.debug("413 %s %s", request.method, request.path)
    response = Response(status=413, body="Payload Too Large")
    response.set_header("Content-Type", "text/plain; charset=utf-8")
    return response
