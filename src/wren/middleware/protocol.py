"""Middleware protocol and Next type.

A middleware stage is any callable matching::

    def my_stage(request: Request, response: Response, next: Next) -> Response: ...

No base class required. Call ``next(request, response)`` to run the rest
of the chain; return without calling it to answer early. A stage that
returns ``None`` is treated as returning the response it was given.

Stages hold configuration, never per-request state, so one instance can
sit in any number of chains.
"""

from typing import Protocol

from wren.http.request import Request
from wren.http.response import Response


class Next(Protocol):
    """Continuation handed to a stage: runs the remaining stages."""

    def __call__(self, request: Request, response: Response) -> Response: ...


class Middleware(Protocol):
    """Protocol for wren middleware.

    Accepts both functions and callable objects::

        # Function middleware
        def timing(request, response, next):
            start = time.monotonic()
            response = next(request, response)
            response.set_header("X-Time", f"{time.monotonic() - start:.3f}")
            return response

        # Class middleware
        class RequireToken:
            def __call__(self, request, response, next):
                if "x-token" not in request.headers:
                    response.status = 401
                    return response
                return next(request, response)
    """

    def __call__(self, request: Request, response: Response, next: Next) -> Response | None: ...
