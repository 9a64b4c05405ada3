"""Routing: per-method tries with literal and ``:param`` segments.

Routes are registered during setup and read concurrently once the
app freezes.
"""

from wren.routing.methods import Method, MethodTable, resolve_methods
from wren.routing.route import NO_MATCH, RouteMatch
from wren.routing.segments import ROOT, Literal, Parameter, parse_pattern, split_path
from wren.routing.trie import RoutingTrie

__all__ = [
    "NO_MATCH",
    "ROOT",
    "Literal",
    "Method",
    "MethodTable",
    "Parameter",
    "RouteMatch",
    "RoutingTrie",
    "parse_pattern",
    "resolve_methods",
    "split_path",
]
