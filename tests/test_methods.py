"""Tests for wren.routing.methods: Method enum and MethodTable."""

import pytest

from wren.errors import ConfigurationError
from wren.routing.methods import Method, MethodTable, resolve_methods
from wren.routing.route import NO_MATCH
from wren.routing.segments import parse_pattern, split_path


def _handler(request, response) -> str:
    return "ok"


class TestMethod:
    def test_or_builds_set(self) -> None:
        assert Method.GET | Method.POST == frozenset({Method.GET, Method.POST})

    def test_or_chains(self) -> None:
        methods = Method.GET | Method.POST | Method.DELETE
        assert methods == frozenset({Method.GET, Method.POST, Method.DELETE})

    def test_update_is_patch(self) -> None:
        assert Method.UPDATE is Method.PATCH
        assert Method.parse("update") is Method.PATCH

    def test_parse_case_insensitive(self) -> None:
        assert Method.parse("get") is Method.GET

    def test_parse_unknown(self) -> None:
        assert Method.parse("BREW") is None

    def test_fixed_set(self) -> None:
        assert {m.value for m in Method} == {
            "GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD",
        }


class TestResolveMethods:
    def test_single(self) -> None:
        assert resolve_methods(Method.GET) == frozenset({Method.GET})

    def test_name(self) -> None:
        assert resolve_methods("post") == frozenset({Method.POST})

    def test_iterable_mixed(self) -> None:
        assert resolve_methods(["GET", Method.PUT]) == frozenset({Method.GET, Method.PUT})

    def test_unknown_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            resolve_methods(["GET", "BREW"])


class TestMethodTable:
    def test_multi_method_registration(self) -> None:
        table = MethodTable()
        table.register(Method.GET | Method.POST, parse_pattern("/about"), _handler)

        segments = split_path("/about")
        assert table.lookup(Method.GET, segments).handler is _handler
        assert table.lookup(Method.POST, segments).handler is _handler
        assert table.lookup(Method.DELETE, segments) is NO_MATCH

    def test_tries_are_independent(self) -> None:
        table = MethodTable()
        table.register(Method.GET | Method.POST, parse_pattern("/about"), _handler)
        assert table.trie(Method.GET) is not table.trie(Method.POST)
        assert len(table.trie(Method.PUT)) == 0

    def test_lookup_by_name(self) -> None:
        table = MethodTable()
        table.register("GET", parse_pattern("/"), _handler)
        assert table.lookup("GET", split_path("/")).handler is _handler

    def test_unknown_method_is_no_match(self) -> None:
        table = MethodTable()
        table.register(Method.GET, parse_pattern("/"), _handler)
        assert table.lookup("BREW", split_path("/")) is NO_MATCH

    def test_routes(self) -> None:
        table = MethodTable()
        table.register(Method.GET | Method.POST, parse_pattern("/users/:id"), _handler)
        rows = sorted((m.value, p) for m, p, _ in table.routes())
        assert rows == [("GET", "/users/:id"), ("POST", "/users/:id")]
