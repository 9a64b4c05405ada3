"""HTTP methods and the per-method routing table."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from enum import Enum
from typing import TypeAlias

from wren._internal.types import Handler
from wren.errors import ConfigurationError
from wren.routing.route import NO_MATCH, RouteMatch
from wren.routing.segments import PathSegment
from wren.routing.trie import RoutingTrie


class Method(Enum):
    """The fixed set of routable HTTP methods.

    Combine with ``|`` to get a method set::

        Method.GET | Method.POST  # frozenset({Method.GET, Method.POST})
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    UPDATE = "PATCH"  # alias: UPDATE routes are PATCH routes
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"

    def __or__(self, other: object) -> frozenset[Method]:
        if isinstance(other, Method):
            return frozenset({self, other})
        if isinstance(other, frozenset):
            return frozenset({self, *other})
        return NotImplemented

    __ror__ = __or__

    @classmethod
    def parse(cls, name: str) -> Method | None:
        """Look up a method by name, case-insensitively. Unknown names give ``None``."""
        try:
            return cls[name.upper()]
        except KeyError:
            return None


MethodSpec: TypeAlias = Method | str | Iterable[Method | str]


def resolve_methods(methods: MethodSpec) -> frozenset[Method]:
    """Normalize a method, a name, or an iterable of either into a method set.

    Raises ``ConfigurationError`` for names outside ``Method``.
    """
    items = [methods] if isinstance(methods, (Method, str)) else list(methods)
    resolved: set[Method] = set()
    for item in items:
        method = item if isinstance(item, Method) else Method.parse(item)
        if method is None:
            msg = f"Unknown HTTP method {item!r}. Expected one of: {', '.join(m.value for m in Method)}"
            raise ConfigurationError(msg)
        resolved.add(method)
    return frozenset(resolved)


class MethodTable:
    """One ``RoutingTrie`` per ``Method``, created up front and never resized.

    A route registered for several methods is inserted into each trie
    independently; tries share no nodes.
    """

    __slots__ = ("_tries",)

    def __init__(self) -> None:
        self._tries: dict[Method, RoutingTrie] = {method: RoutingTrie() for method in Method}

    def register(
        self,
        methods: MethodSpec,
        pattern: tuple[PathSegment, ...],
        handler: Handler,
    ) -> None:
        for method in resolve_methods(methods):
            self._tries[method].register(pattern, handler)

    def lookup(self, method: Method | str, segments: list[str] | tuple[str, ...]) -> RouteMatch:
        """Match *segments* in *method*'s trie. Unknown methods never match."""
        resolved = method if isinstance(method, Method) else Method.parse(method)
        if resolved is None:
            return NO_MATCH
        return self._tries[resolved].match(segments)

    def trie(self, method: Method) -> RoutingTrie:
        return self._tries[method]

    def routes(self) -> Iterator[tuple[Method, str, Handler]]:
        """Yield ``(method, pattern, handler)`` across all tries."""
        for method, trie in self._tries.items():
            for pattern, handler in trie.routes():
                yield method, pattern, handler
