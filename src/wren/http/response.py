"""Mutable HTTP response.

One Response is created per request and threaded through every stage.
Stages and normalization change it in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class Response:
    """Status, body, and headers for one request.

    Header names are stored as given; lookups through ``get_header`` are
    case-insensitive.
    """

    status: int = 200
    body: str | bytes = ""
    headers: dict[str, str] = field(default_factory=dict)

    def set_header(self, name: str, value: str) -> Response:
        """Set *name*, replacing any existing header that differs only by case."""
        for existing in [k for k in self.headers if k.lower() == name.lower()]:
            del self.headers[existing]
        self.headers[name] = value
        return self

    def get_header(self, name: str, default: str | None = None) -> str | None:
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return default

    @property
    def body_bytes(self) -> bytes:
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body


def redirect(response: Response, location: str, status: int = 302) -> Response:
    """Point *response* at *location* (302 Found unless told otherwise).

    Returns the same response so the call can be chained or returned
    straight from a handler.
    """
    response.status = status
    response.set_header("Location", location)
    return response
