"""Route pattern segments and path splitting.

A pattern is an ordered tuple of ``Literal`` and ``Parameter`` segments.
Every pattern and every concrete path starts with the synthetic ``ROOT``
literal, so ``"/"`` is a one-segment pattern rather than an empty one.
"""

from dataclasses import dataclass
from typing import TypeAlias

from wren.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class Literal:
    """A segment that matches its text exactly."""

    text: str


@dataclass(frozen=True, slots=True)
class Parameter:
    """A ``:name`` segment that binds whatever text sits at its position."""

    name: str


PathSegment: TypeAlias = Literal | Parameter

ROOT = Literal("/")


def split_path(path: str) -> list[str]:
    """Split a concrete request path into segments.

    Empty components are dropped, so trailing and doubled slashes
    are ignored and ``""`` splits the same way as ``"/"``::

        "/"            -> ["/"]
        "/about/"      -> ["/", "about"]
        "/users//42"   -> ["/", "users", "42"]
    """
    parts = [ROOT.text]
    parts.extend(part for part in path.split("/") if part)
    return parts


def parse_pattern(pattern: str) -> tuple[PathSegment, ...]:
    """Parse a route pattern string into segments.

    Examples::

        "/"            -> (ROOT,)
        "/users"       -> (ROOT, Literal("users"))
        "/users/:id"   -> (ROOT, Literal("users"), Parameter("id"))
    """
    segments: list[PathSegment] = [ROOT]
    for part in split_path(pattern)[1:]:
        if part.startswith(":"):
            name = part[1:]
            if not name:
                msg = f"Route pattern {pattern!r} has a parameter segment with no name."
                raise ConfigurationError(msg)
            segments.append(Parameter(name))
        else:
            segments.append(Literal(part))
    return tuple(segments)


def format_pattern(segments: tuple[PathSegment, ...] | list[PathSegment]) -> str:
    """Render segments back into a pattern string (``ROOT`` becomes the leading slash)."""
    parts: list[str] = []
    for seg in segments:
        if seg == ROOT and not parts:
            continue
        match seg:
            case Parameter(name=name):
                parts.append(f":{name}")
            case Literal(text=text):
                parts.append(text)
    return "/" + "/".join(parts)
