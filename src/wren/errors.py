"""Wren exception hierarchy.

A route that doesn't match is not an error here: lookups return
``NO_MATCH`` and the dispatcher answers 404. Exceptions are for
misconfiguration and for handlers that want to stop with a status.
"""

from dataclasses import dataclass


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when a route or the app is set up incorrectly.

    Surfaces at registration time, before any request is served.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(WrenError):
    """An error that maps directly to an HTTP status code.

    Handlers and middleware may raise it. It travels out of the
    pipeline like any other exception, and the ASGI handler turns it
    into a response with this status.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)
