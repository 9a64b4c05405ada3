"""Ordered middleware execution.

A ``Chain`` is a tuple of stages plus an index-based continuation.
Stage *i* receives a ``Continuation`` bound to *i + 1*; nothing runs unless the
previous stage asked for it.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Middleware


class Continuation:
    """Runs the stage at ``index`` and every stage after it."""

    __slots__ = ("_index", "_stages")

    def __init__(self, stages: Sequence[Middleware], index: int) -> None:
        self._stages = stages
        self._index = index

    @property
    def index(self) -> int:
        return self._index

    def __call__(self, request: Request, response: Response) -> Response:
        if self._index >= len(self._stages):
            # Past the last stage: nothing left to do
            return response
        stage = self._stages[self._index]
        result = stage(request, response, Continuation(self._stages, self._index + 1))
        return response if result is None else result


class Chain:
    """An immutable, ordered sequence of middleware stages.

    Usage::

        chain = Chain([DefaultHeaders(), QueryDecoder(), dispatcher])
        response = chain.execute(request, Response())

    Chains compose by concatenation::

        Chain([a, b]) + Chain([c])  # Chain([a, b, c])
    """

    __slots__ = ("stages",)

    def __init__(self, stages: Iterable[Middleware] = ()) -> None:
        self.stages: tuple[Middleware, ...] = tuple(stages)

    @classmethod
    def concat(cls, *chains: Chain | Iterable[Middleware]) -> Chain:
        stages: list[Middleware] = []
        for chain in chains:
            stages.extend(chain.stages if isinstance(chain, Chain) else chain)
        return cls(stages)

    def __add__(self, other: Chain | Iterable[Middleware]) -> Chain:
        return Chain.concat(self, other)

    def __len__(self) -> int:
        return len(self.stages)

    def __repr__(self) -> str:
        names = ", ".join(getattr(s, "__name__", type(s).__name__) for s in self.stages)
        return f"Chain([{names}])"

    def execute(self, request: Request, response: Response) -> Response:
        """Run the chain front to back and return the final response."""
        return Continuation(self.stages, 0)(request, response)
