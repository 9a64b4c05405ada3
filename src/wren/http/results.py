"""Handler return values and response normalization.

Handlers return the simplest shape that says what they mean::

    return "hello"              # body only
    return 204                  # status only
    return 201, "created"       # status and body
    return Response(...)        # replaces the in-flight response
    return None                 # the handler mutated the response itself

``as_result`` turns those shapes into one of a closed set of variants,
and ``prepare_response`` applies a variant to the in-flight response.
"""

from dataclasses import dataclass
from typing import Any, TypeAlias

from wren.http.response import Response


@dataclass(frozen=True, slots=True)
class Text:
    body: str | bytes


@dataclass(frozen=True, slots=True)
class StatusOnly:
    status: int


@dataclass(frozen=True, slots=True)
class StatusAndBody:
    status: int
    body: str | bytes


@dataclass(frozen=True, slots=True)
class FullResponse:
    response: Response


@dataclass(frozen=True, slots=True)
class Unchanged:
    pass


HandlerResult: TypeAlias = Text | StatusOnly | StatusAndBody | FullResponse | Unchanged


def as_result(value: Any) -> HandlerResult:
    """Classify a handler's raw return value.

    Raises ``TypeError`` for any other shape, naming what was returned.
    """
    match value:
        case Text() | StatusOnly() | StatusAndBody() | FullResponse() | Unchanged():
            return value
        case None:
            return Unchanged()
        case Response():
            return FullResponse(value)
        case bool():
            pass
        case int():
            return StatusOnly(value)
        case str() | bytes():
            return Text(value)
        case (int() as status, str() | bytes() as body) if not isinstance(status, bool):
            return StatusAndBody(status, body)
    msg = (
        f"Handler returned {type(value).__name__}; expected str, bytes, int, "
        "(int, str) or Response"
    )
    raise TypeError(msg)


def prepare_response(value: Any, response: Response) -> Response:
    """Apply a handler's return value to *response* and return the result.

    ``FullResponse`` returns the handler's own response object; every
    other variant mutates and returns *response*.
    """
    match as_result(value):
        case Text(body=body):
            response.body = body
        case StatusOnly(status=status):
            response.status = status
        case StatusAndBody(status=status, body=body):
            response.status = status
            response.body = body
        case FullResponse(response=replacement):
            return replacement
        case Unchanged():
            pass
    return response
