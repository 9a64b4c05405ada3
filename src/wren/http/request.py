"""Per-request context.

Metadata comes from the transport and doesn't change. ``state`` is the
mutable part: decoding stages fill it, the dispatcher adds the bound
route parameters, and handlers read it through ``wren.params``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from wren._internal.asgi import Scope
from wren.http.headers import Headers

# Reserved state keys
URL_PARAMS = "url_params"
ROUTE_PARAMS = "route_params"
COOKIES = "cookies"
DATA = "data"
FILES = "files"
RESOURCE = "resource"


@dataclass(slots=True)
class Request:
    """A request moving through the middleware chain.

    Created fresh for each incoming request and never shared between
    requests.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query_string: bytes = b""
    body: bytes = b""
    client: tuple[str, int] | None = None
    state: dict[str, Any] = field(default_factory=dict)

    @property
    def resource(self) -> str:
        """Decoded path used for routing; set by ``QueryDecoder``."""
        return self.state.get(RESOURCE, self.path)

    @property
    def route_params(self) -> dict[str, str]:
        return self.state.get(ROUTE_PARAMS, {})

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def content_length(self) -> int | None:
        value = self.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    @classmethod
    def from_asgi(cls, scope: Scope, body: bytes = b"") -> Request:
        """Create a Request from an ASGI HTTP scope and the full body."""
        client = scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            query_string=scope.get("query_string", b""),
            body=body,
            client=tuple(client) if client else None,
        )
