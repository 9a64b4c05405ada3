"""Middleware: Protocol-based, no inheritance required.

A stage is any callable matching:
    def stage(request: Request, response: Response, next: Next) -> Response

Built-in stages (installed ahead of the dispatcher by ``App``):
    DefaultHeaders -- Seed response headers
    QueryDecoder -- Path and query string into request state
    CookieDecoder -- Cookie header into request state
    BodyDecoder -- Form and JSON bodies into request state
"""

from wren.middleware.chain import Chain, Continuation
from wren.middleware.decoders import BodyDecoder, CookieDecoder, DefaultHeaders, QueryDecoder
from wren.middleware.protocol import Middleware, Next

__all__ = [
    "BodyDecoder",
    "Chain",
    "Continuation",
    "CookieDecoder",
    "DefaultHeaders",
    "Middleware",
    "Next",
    "QueryDecoder",
]
