"""Safe accessors for decoded request values.

Each accessor reads one section of ``request.state`` and passes the
value through a validator. The default validator strips HTML-like tags
so values are safe to echo back; pass ``unsafe_string`` to get the raw
text, or any other callable (``int``, ``float``, your own) to convert.
Accessors return ``None`` when the section or the key is missing.
"""

import re
from collections.abc import Callable
from typing import Any, TypeAlias

from wren.http.request import COOKIES, DATA, ROUTE_PARAMS, URL_PARAMS, Request

_TAG_RE = re.compile(r"</?[^>]*>|</?|>")


def sanitize(value: Any) -> Any:
    """Remove ``<...>`` tags and stray angle brackets from strings.

    Non-string values are returned unchanged.
    """
    if isinstance(value, str):
        return _TAG_RE.sub("", value)
    return value


def sanitize_string(value: Any) -> str:
    """Default validator: sanitize, then coerce to ``str``."""
    return str(sanitize(value))


def unsafe_string(value: Any) -> str:
    """Validator that returns the raw text, tags and all."""
    return str(value)


Validator: TypeAlias = Callable[[Any], Any]


def _access(request: Request, section: str, key: str, validator: Validator) -> Any:
    values = request.state.get(section)
    if values is None:
        return None
    value = values.get(key)
    if value is None:
        return None
    return validator(value)


def url_param(request: Request, key: str, validator: Validator = sanitize_string) -> Any:
    """A query string value (``?key=...``)."""
    return _access(request, URL_PARAMS, key, validator)


def route_param(request: Request, key: str, validator: Validator = sanitize_string) -> Any:
    """A value bound by a ``:key`` route segment."""
    return _access(request, ROUTE_PARAMS, key, validator)


def param(request: Request, key: str, validator: Validator = sanitize_string) -> Any:
    """A decoded body field (form or JSON)."""
    return _access(request, DATA, key, validator)


def cookie_param(request: Request, key: str, validator: Validator = sanitize_string) -> Any:
    return _access(request, COOKIES, key, validator)
