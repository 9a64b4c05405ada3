"""Per-method routing trie.

Routes are inserted during setup and read concurrently afterwards.
Nothing here locks: the app freezes before it serves requests, and
matching never mutates a node.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from wren._internal.types import Handler
from wren.routing.route import NO_MATCH, RouteMatch
from wren.routing.segments import Literal, Parameter, PathSegment, format_pattern

logger = logging.getLogger("wren.routing")


class _TrieNode:
    """One path depth. Can be an intermediate node and a terminal at once."""

    __slots__ = ("children", "handler", "param_child")

    def __init__(self) -> None:
        # Literal children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single parameter child (one per depth, no branching by name)
        self.param_child: _ParamEdge | None = None
        self.handler: Handler | None = None


@dataclass(slots=True)
class _ParamEdge:
    name: str
    node: _TrieNode


class RoutingTrie:
    """Prefix tree over path segments for a single HTTP method.

    Usage::

        trie = RoutingTrie()
        trie.register(parse_pattern("/users/:id"), show_user)
        match = trie.match(split_path("/users/42"))
        match.handler, match.params  # (show_user, {"id": "42"})
    """

    __slots__ = ("_root",)

    def __init__(self) -> None:
        self._root = _TrieNode()

    def register(self, pattern: tuple[PathSegment, ...], handler: Handler) -> None:
        """Insert *handler* at the node reached by *pattern*."""
        node = self._root
        for seg in pattern:
            match seg:
                case Literal(text=text):
                    child = node.children.get(text)
                    if child is None:
                        child = node.children[text] = _TrieNode()
                    node = child
                case Parameter(name=name):
                    # A second parameter name at this depth reuses the first
                    # edge, and keeps its name.
                    if node.param_child is None:
                        node.param_child = _ParamEdge(name=name, node=_TrieNode())
                    elif node.param_child.name != name:
                        logger.debug(
                            "Parameter :%s shares the :%s slot in %s",
                            name,
                            node.param_child.name,
                            format_pattern(pattern),
                        )
                    node = node.param_child.node

        # Last registration wins.
        if node.handler is not None and node.handler is not handler:
            logger.debug("Replacing handler for %s", format_pattern(pattern))
        node.handler = handler

    def match(self, segments: list[str] | tuple[str, ...]) -> RouteMatch:
        """Resolve concrete *segments* to a handler and bound parameters.

        Literal children win over the parameter child at every depth.
        Returns ``NO_MATCH`` if the walk dead-ends or stops on a node
        without a handler.
        """
        node = self._root
        params: dict[str, str] = {}
        for part in segments:
            child = node.children.get(part)
            if child is not None:
                node = child
                continue
            edge = node.param_child
            if edge is None:
                return NO_MATCH
            params[edge.name] = part
            node = edge.node

        if node.handler is None:
            return NO_MATCH
        return RouteMatch(handler=node.handler, params=params)

    def routes(self) -> Iterator[tuple[str, Handler]]:
        """Yield ``(pattern, handler)`` for every terminal node, literals first."""
        yield from self._walk(self._root, [])

    def _walk(
        self, node: _TrieNode, trail: list[PathSegment]
    ) -> Iterator[tuple[str, Handler]]:
        if node.handler is not None:
            yield format_pattern(trail), node.handler
        for text, child in node.children.items():
            yield from self._walk(child, [*trail, Literal(text)])
        if node.param_child is not None:
            edge = node.param_child
            yield from self._walk(edge.node, [*trail, Parameter(edge.name)])

    def __len__(self) -> int:
        return sum(1 for _ in self.routes())
