"""Tests for wren.http.forms: URL-encoded and multipart parsing."""

from pathlib import Path

import pytest

from wren.http.forms import UploadFile, media_type, parse_form_body

BOUNDARY = "----wrenboundary"


def _multipart(*parts: str) -> bytes:
    body = "".join(f"--{BOUNDARY}\r\n{part}\r\n" for part in parts)
    return (body + f"--{BOUNDARY}--\r\n").encode("utf-8")


class TestMediaType:
    def test_strips_parameters(self) -> None:
        assert media_type("Text/HTML; charset=utf-8") == "text/html"

    def test_empty(self) -> None:
        assert media_type(None) == ""
        assert media_type("") == ""


class TestUrlEncoded:
    def test_fields(self) -> None:
        fields, files = parse_form_body(
            b"title=Hello+World&done=", "application/x-www-form-urlencoded"
        )
        assert fields == {"title": "Hello World", "done": ""}
        assert files == {}

    def test_utf8(self) -> None:
        fields, _ = parse_form_body(
            "name=Zoë".encode(), "application/x-www-form-urlencoded; charset=utf-8"
        )
        assert fields == {"name": "Zoë"}

    def test_unsupported_type(self) -> None:
        with pytest.raises(ValueError, match="Unsupported form content type"):
            parse_form_body(b"{}", "application/json")


class TestMultipart:
    def test_fields_and_files(self) -> None:
        body = _multipart(
            'Content-Disposition: form-data; name="title"\r\n\r\nHello',
            'Content-Disposition: form-data; name="avatar"; filename="me.png"\r\n'
            "Content-Type: image/png\r\n\r\nPNGDATA",
        )
        fields, files = parse_form_body(body, f"multipart/form-data; boundary={BOUNDARY}")
        assert fields == {"title": "Hello"}
        upload = files["avatar"]
        assert upload.filename == "me.png"
        assert upload.content_type == "image/png"
        assert upload.content == b"PNGDATA"
        assert upload.size == 7

    def test_missing_boundary(self) -> None:
        with pytest.raises(ValueError, match="boundary"):
            parse_form_body(b"", "multipart/form-data")


class TestUploadFile:
    def test_save(self, tmp_path: Path) -> None:
        upload = UploadFile("a.txt", "text/plain", b"hello")
        target = tmp_path / "a.txt"
        upload.save(target)
        assert target.read_bytes() == b"hello"
