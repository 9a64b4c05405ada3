"""Tests for wren.middleware.decoders: built-in stages ahead of dispatch."""

import json

from wren.http.headers import Headers
from wren.http.request import COOKIES, DATA, FILES, RESOURCE, URL_PARAMS, Request
from wren.http.response import Response
from wren.middleware.chain import Chain
from wren.middleware.decoders import BodyDecoder, CookieDecoder, DefaultHeaders, QueryDecoder


def _terminal(request, response, next):
    response.body = "reached"
    return response


def _run(stage, request: Request) -> Response:
    return Chain([stage, _terminal]).execute(request, Response())


def _post(body: bytes, content_type: str) -> Request:
    return Request(
        method="POST",
        path="/",
        headers=Headers.from_dict({"Content-Type": content_type}),
        body=body,
    )


class TestDefaultHeaders:
    def test_seeds_headers(self) -> None:
        response = _run(DefaultHeaders(), Request(method="GET", path="/"))
        assert response.headers == {
            "Server": "wren",
            "Content-Type": "text/html; charset=utf-8",
        }

    def test_handler_can_override(self) -> None:
        def json_handler(request, response, next):
            response.set_header("content-type", "application/json")
            return response

        chain = Chain([DefaultHeaders(), json_handler])
        response = chain.execute(Request(method="GET", path="/"), Response())
        assert response.get_header("Content-Type") == "application/json"
        assert len([k for k in response.headers if k.lower() == "content-type"]) == 1


class TestQueryDecoder:
    def test_query_string(self) -> None:
        request = Request(method="GET", path="/search", query_string=b"q=wren&page=2&q=other")
        _run(QueryDecoder(), request)
        assert request.state[URL_PARAMS] == {"q": "wren", "page": "2"}
        assert request.state[RESOURCE] == "/search"

    def test_blank_values_kept(self) -> None:
        request = Request(method="GET", path="/", query_string=b"flag=")
        _run(QueryDecoder(), request)
        assert request.state[URL_PARAMS] == {"flag": ""}

    def test_question_mark_stays_in_path(self) -> None:
        request = Request(method="GET", path="/files/a?b")
        _run(QueryDecoder(), request)
        assert request.state[RESOURCE] == "/files/a?b"
        assert request.state[URL_PARAMS] == {}

    def test_non_latin_path_with_question_mark(self) -> None:
        request = Request(method="GET", path="/tags/c?✓", query_string=b"x=1")
        response = _run(QueryDecoder(), request)
        assert response.body == "reached"
        assert request.state[RESOURCE] == "/tags/c?✓"
        assert request.state[URL_PARAMS] == {"x": "1"}

    def test_no_query(self) -> None:
        request = Request(method="GET", path="/")
        _run(QueryDecoder(), request)
        assert request.state[URL_PARAMS] == {}


class TestCookieDecoder:
    def test_cookies(self) -> None:
        request = Request(
            method="GET",
            path="/",
            headers=Headers.from_dict({"Cookie": "session=abc; theme=dark"}),
        )
        _run(CookieDecoder(), request)
        assert request.state[COOKIES] == {"session": "abc", "theme": "dark"}

    def test_no_cookie_header(self) -> None:
        request = Request(method="GET", path="/")
        _run(CookieDecoder(), request)
        assert request.state[COOKIES] == {}


class TestBodyDecoder:
    def test_urlencoded(self) -> None:
        request = _post(b"name=Ada&lang=en", "application/x-www-form-urlencoded")
        response = _run(BodyDecoder(), request)
        assert response.body == "reached"
        assert request.state[DATA] == {"name": "Ada", "lang": "en"}

    def test_json_object(self) -> None:
        request = _post(json.dumps({"name": "Ada"}).encode(), "application/json; charset=utf-8")
        _run(BodyDecoder(), request)
        assert request.state[DATA] == {"name": "Ada"}

    def test_json_array_leaves_data_empty(self) -> None:
        request = _post(b"[1, 2]", "application/json")
        _run(BodyDecoder(), request)
        assert request.state[DATA] == {}
        assert request.body == b"[1, 2]"

    def test_invalid_json_is_400(self) -> None:
        request = _post(b"{nope", "application/json")
        response = _run(BodyDecoder(), request)
        assert response.status == 400
        assert response.body == "Bad Request"

    def test_other_content_type(self) -> None:
        request = _post(b"raw bytes", "application/octet-stream")
        response = _run(BodyDecoder(), request)
        assert response.body == "reached"
        assert request.state[DATA] == {}
        assert request.state[FILES] == {}

    def test_empty_body(self) -> None:
        request = Request(method="GET", path="/")
        _run(BodyDecoder(), request)
        assert request.state[DATA] == {}

    def test_too_large_is_413(self) -> None:
        request = _post(b"x" * 11, "text/plain")
        response = _run(BodyDecoder(max_content_length=10), request)
        assert response.status == 413
        assert DATA not in request.state

    def test_declared_length_too_large(self) -> None:
        request = Request(
            method="POST",
            path="/",
            headers=Headers.from_dict({"Content-Length": "999"}),
        )
        response = _run(BodyDecoder(max_content_length=10), request)
        assert response.status == 413
