"""Tests for wren.params: sanitizing accessors for request state."""

import pytest

from wren.http.request import COOKIES, DATA, ROUTE_PARAMS, URL_PARAMS, Request
from wren.params import (
    cookie_param,
    param,
    route_param,
    sanitize,
    unsafe_string,
    url_param,
)


def _request(**state: dict) -> Request:
    return Request(method="GET", path="/", state=dict(state))


class TestSanitize:
    def test_strips_tags(self) -> None:
        assert sanitize("<script>alert(1)</script>hi") == "alert(1)hi"

    def test_strips_stray_brackets(self) -> None:
        assert sanitize("1 > 0 and 2 < 3") == "1  0 and 2  3"

    def test_non_string_unchanged(self) -> None:
        assert sanitize(42) == 42


class TestAccessors:
    def test_url_param(self) -> None:
        request = _request(**{URL_PARAMS: {"q": "<b>wren</b>"}})
        assert url_param(request, "q") == "wren"

    def test_unsafe_string(self) -> None:
        request = _request(**{URL_PARAMS: {"q": "<b>wren</b>"}})
        assert url_param(request, "q", unsafe_string) == "<b>wren</b>"

    def test_route_param_with_converter(self) -> None:
        request = _request(**{ROUTE_PARAMS: {"id": "42"}})
        assert route_param(request, "id", int) == 42

    def test_converter_errors_propagate(self) -> None:
        request = _request(**{ROUTE_PARAMS: {"id": "abc"}})
        with pytest.raises(ValueError):
            route_param(request, "id", int)

    def test_param_reads_body_data(self) -> None:
        request = _request(**{DATA: {"name": "Ada"}})
        assert param(request, "name") == "Ada"

    def test_non_string_body_value(self) -> None:
        request = _request(**{DATA: {"count": 3}})
        assert param(request, "count") == "3"
        assert param(request, "count", lambda v: v) == 3

    def test_cookie_param(self) -> None:
        request = _request(**{COOKIES: {"theme": "dark"}})
        assert cookie_param(request, "theme") == "dark"

    def test_missing_key(self) -> None:
        request = _request(**{URL_PARAMS: {}})
        assert url_param(request, "q") is None

    def test_missing_section(self) -> None:
        assert param(_request(), "name") is None
        assert route_param(_request(), "id") is None
