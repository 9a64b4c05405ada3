"""Query string and URL-encoded body decoding."""

from urllib.parse import parse_qs


def parse_query(raw: bytes | str, encoding: str = "latin-1") -> dict[str, str]:
    """Decode ``a=1&b=&a=2`` into ``{"a": "1", "b": ""}``.

    Blank values are kept. When a key repeats, the first value wins;
    use ``parse_query_lists`` to see every value.
    """
    return {key: values[0] for key, values in parse_query_lists(raw, encoding).items()}


def parse_query_lists(raw: bytes | str, encoding: str = "latin-1") -> dict[str, list[str]]:
    text = raw.decode(encoding) if isinstance(raw, bytes) else raw
    return parse_qs(text, keep_blank_values=True)
