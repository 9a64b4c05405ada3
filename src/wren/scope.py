"""Registration-time scope: the current path prefix and middleware stack.

``App.namespace`` and ``App.with_middleware`` push onto this state for the
duration of a ``with`` block and restore it on exit, however the block
ends. Routes registered inside the block see the extended state; routes
registered after it see exactly what was there before.

Only touched during setup, from one thread.
"""

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field

from wren._internal.types import Handler
from wren.http.request import Request
from wren.http.response import Response
from wren.http.results import prepare_response
from wren.middleware.chain import Chain
from wren.middleware.protocol import Middleware, Next


@dataclass(slots=True)
class RegistrationScope:
    prefix: str = ""
    stack: list[Middleware] = field(default_factory=list)

    @contextmanager
    def push_prefix(self, prefix: str) -> Iterator[None]:
        saved = self.prefix
        self.prefix = saved + prefix
        try:
            yield
        finally:
            self.prefix = saved

    @contextmanager
    def push_middleware(self, stages: Sequence[Middleware]) -> Iterator[None]:
        saved = len(self.stack)
        self.stack.extend(stages)
        try:
            yield
        finally:
            del self.stack[saved:]

    def full_path(self, path: str) -> str:
        return self.prefix + path

    def wrap(self, handler: Handler) -> Handler:
        """Bind *handler* to a snapshot of the current middleware stack.

        With an empty stack the raw handler comes back unchanged and the
        dispatcher normalizes its result.
        """
        if not self.stack:
            return handler
        return ScopedHandler(handler, Chain([*self.stack, HandlerStage(handler)]))


class HandlerStage:
    """Final stage of a scoped chain: call the handler, normalize its result."""

    __slots__ = ("handler",)

    def __init__(self, handler: Handler) -> None:
        self.handler = handler

    def __call__(self, request: Request, response: Response, next: Next) -> Response:
        return prepare_response(self.handler(request, response), response)


class ScopedHandler:
    """A handler that runs its own middleware chain before the real handler.

    Registered in place of the raw handler, so the trie stores one
    callable either way. Its return value is already a ``Response``.
    """

    __slots__ = ("chain", "handler")

    def __init__(self, handler: Handler, chain: Chain) -> None:
        self.handler = handler
        self.chain = chain

    @property
    def __name__(self) -> str:
        return getattr(self.handler, "__name__", type(self.handler).__name__)

    def __call__(self, request: Request, response: Response) -> Response:
        return self.chain.execute(request, response)

    def __repr__(self) -> str:
        return f"ScopedHandler({self.__name__}, {self.chain!r})"
