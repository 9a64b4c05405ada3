"""Built-in stages that run ahead of the dispatcher.

Each one decodes part of the raw request into ``request.state`` (or
seeds the response) and hands off to the next stage. ``BodyDecoder``
is the only one that can answer early.
"""

import json
import logging
from dataclasses import dataclass

from wren.http.cookies import parse_cookies
from wren.http.forms import FORM_URLENCODED, MULTIPART, media_type, parse_form_body
from wren.http.query import parse_query
from wren.http.request import COOKIES, DATA, FILES, RESOURCE, URL_PARAMS, Request
from wren.http.response import Response
from wren.middleware.protocol import Next

logger = logging.getLogger("wren.server")


@dataclass(frozen=True, slots=True)
class DefaultHeaders:
    """Seed every response with a fixed set of headers.

    Later stages and handlers can overwrite any of them.
    """

    headers: tuple[tuple[str, str], ...] = (
        ("Content-Type", "text/html; charset=utf-8"),
    )
    server_name: str | None = "wren"

    def __call__(self, request: Request, response: Response, next: Next) -> Response:
        if self.server_name:
            response.set_header("Server", self.server_name)
        for name, value in self.headers:
            response.set_header(name, value)
        return next(request, response)


class QueryDecoder:
    """Decode the query string into ``state["url_params"]``.

    ``state["resource"]`` is the request path as the server decoded it.
    A ``?`` inside that path is part of a segment, never a query start.
    First value wins for repeated query keys.
    """

    __slots__ = ()

    def __call__(self, request: Request, response: Response, next: Next) -> Response:
        request.state[RESOURCE] = request.path
        request.state[URL_PARAMS] = parse_query(request.query_string)
        return next(request, response)


class CookieDecoder:
    """Parse the ``Cookie`` header into ``state["cookies"]``."""

    __slots__ = ()

    def __call__(self, request: Request, response: Response, next: Next) -> Response:
        request.state[COOKIES] = parse_cookies(request.headers.get("cookie", ""))
        return next(request, response)


@dataclass(frozen=True, slots=True)
class BodyDecoder:
    """Decode form and JSON bodies into ``state["data"]``.

    Answers 413 when the body exceeds ``max_content_length`` and 400 when
    a JSON or form body can't be parsed. Other content types leave
    ``data`` empty and the raw bytes on ``request.body``.
    """

    max_content_length: int = 16 * 1024 * 1024

    def __call__(self, request: Request, response: Response, next: Next) -> Response:
        declared = request.content_length
        if len(request.body) > self.max_content_length or (
            declared is not None and declared > self.max_content_length
        ):
            logger.debug("413 %s %s", request.method, request.path)
            response.status = 413
            response.body = "Payload Too Large"
            return response

        request.state[DATA] = {}
        request.state[FILES] = {}
        if not request.body:
            return next(request, response)

        kind = media_type(request.content_type)
        try:
            if kind in (FORM_URLENCODED, MULTIPART):
                fields, files = parse_form_body(request.body, request.content_type or "")
                request.state[DATA] = fields
                request.state[FILES] = files
            elif kind == "application/json" or kind.endswith("+json"):
                payload = json.loads(request.body)
                if isinstance(payload, dict):
                    request.state[DATA] = payload
        except (ValueError, UnicodeDecodeError) as exc:
            logger.debug("400 %s %s: %s", request.method, request.path, exc)
            response.status = 400
            response.body = "Bad Request"
            return response

        return next(request, response)
