"""Form body parsing: URL-encoded and multipart.

URL-encoded bodies use stdlib ``urllib.parse``. Multipart bodies are
parsed with ``python-multipart``.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from python_multipart.multipart import MultipartParser, parse_options_header

from wren.http.query import parse_query

FORM_URLENCODED = "application/x-www-form-urlencoded"
MULTIPART = "multipart/form-data"


@dataclass(frozen=True, slots=True)
class UploadFile:
    """A file from a multipart form submission, held in memory."""

    filename: str
    content_type: str
    content: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.content)

    def save(self, path: Path) -> None:
        """Write the content to *path*. Parent directories must exist."""
        path.write_bytes(self.content)


def media_type(content_type: str | None) -> str:
    """``"text/html; charset=utf-8"`` -> ``"text/html"``."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def parse_form_body(
    body: bytes, content_type: str
) -> tuple[dict[str, str], dict[str, UploadFile]]:
    """Parse a form body into ``(fields, files)``.

    Raises ``ValueError`` for a content type that isn't a form encoding
    or a multipart body without a boundary.
    """
    kind = media_type(content_type)
    if kind == FORM_URLENCODED:
        return parse_query(body, "utf-8"), {}
    if kind == MULTIPART:
        return _parse_multipart(body, content_type)
    msg = f"Unsupported form content type: {content_type!r}"
    raise ValueError(msg)


def _parse_multipart(
    body: bytes, content_type: str
) -> tuple[dict[str, str], dict[str, UploadFile]]:
    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if boundary is None:
        msg = "Multipart form data missing boundary parameter"
        raise ValueError(msg)

    fields: dict[str, str] = {}
    files: dict[str, UploadFile] = {}

    part_headers: dict[str, str] = {}
    pending_header = ""
    chunks = bytearray()

    def on_part_begin() -> None:
        nonlocal chunks
        part_headers.clear()
        chunks = bytearray()

    def on_part_data(data: bytes, start: int, end: int) -> None:
        chunks.extend(data[start:end])

    def on_header_field(data: bytes, start: int, end: int) -> None:
        nonlocal pending_header
        pending_header = data[start:end].decode("latin-1").lower()

    def on_header_value(data: bytes, start: int, end: int) -> None:
        part_headers[pending_header] = data[start:end].decode("latin-1")

    def on_part_end() -> None:
        _, params = parse_options_header(
            part_headers.get("content-disposition", "").encode("latin-1")
        )
        name = params.get(b"name")
        if name is None:
            return
        key = name.decode("utf-8")
        filename = params.get(b"filename")
        if filename is not None:
            files[key] = UploadFile(
                filename=filename.decode("utf-8"),
                content_type=part_headers.get("content-type", "application/octet-stream"),
                content=bytes(chunks),
            )
        else:
            fields.setdefault(key, chunks.decode("utf-8", errors="replace"))

    callbacks: dict[str, Any] = {
        "on_part_begin": on_part_begin,
        "on_part_data": on_part_data,
        "on_part_end": on_part_end,
        "on_header_field": on_header_field,
        "on_header_value": on_header_value,
    }
    parser = MultipartParser(boundary, callbacks)
    parser.write(body)
    parser.finalize()
    return fields, files
