"""ASGI handler: the only place wren meets the transport.

Reads the request body up to the configured limit, builds a
``Request``, and runs the synchronous chain on a worker thread so one
request owns one thread from the first stage to the last. Exceptions
that escape the chain are turned into responses here.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

import anyio.to_thread

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.types import Hook
from wren.errors import HTTPError
from wren.http.request import Request
from wren.http.response import Response
from wren.server.errors import (
    http_error_response,
    internal_error_response,
    payload_too_large_response,
)
from wren.server.sender import send_response

if TYPE_CHECKING:
    from wren.app import App

logger = logging.getLogger("wren.server")


async def handle_asgi(app: App, scope: Scope, receive: Receive, send: Send) -> None:
    """Dispatch one ASGI connection scope."""
    if scope["type"] == "lifespan":
        await handle_lifespan(app, receive, send)
    elif scope["type"] == "http":
        await handle_request(app, scope, receive, send)


async def read_body(receive: Receive, limit: int | None = None) -> bytes | None:
    """Collect every ``http.request`` chunk into one bytes object.

    Returns ``None`` as soon as the running size passes *limit*; the
    rest of the body is left unread.
    """
    chunks: list[bytes] = []
    size = 0
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            break
        body = message.get("body", b"")
        if body:
            size += len(body)
            if limit is not None and size > limit:
                return None
            chunks.append(body)
        if not message.get("more_body", False):
            break
    return b"".join(chunks)


async def handle_request(app: App, scope: Scope, receive: Receive, send: Send) -> None:
    """Process a single HTTP request through the app's chain.

    A body larger than ``max_content_length`` is refused with 413 before
    the chain runs. A declared ``content-length`` over the limit is
    refused without reading anything.
    """
    app._ensure_frozen()
    request = Request.from_asgi(scope)
    head = request.method == "HEAD"
    limit = app.config.max_content_length

    declared = request.content_length
    body: bytes | None = None
    if declared is None or declared <= limit:
        body = await read_body(receive, limit)
    if body is None:
        await send_response(payload_too_large_response(request), send, head=head)
        return
    request.body = body

    response: Response
    try:
        response = await anyio.to_thread.run_sync(app.handle, request)
    except HTTPError as exc:
        response = http_error_response(exc, request, app.config.debug)
    except Exception as exc:
        response = internal_error_response(exc, request, app.config.debug)

    await send_response(response, send, head=head)


async def run_hooks(hooks: list[Hook]) -> None:
    """Call each hook in order, awaiting the ones that are async."""
    for hook in hooks:
        result = hook()
        if inspect.isawaitable(result):
            await result


async def handle_lifespan(app: App, receive: Receive, send: Send) -> None:
    """Run the ASGI lifespan protocol.

    Freezes the app at startup, before the first HTTP request, then
    runs the registered hooks and reports back to the server.
    """
    app._ensure_frozen()

    while True:
        message = await receive()
        msg_type = message["type"]

        if msg_type == "lifespan.startup":
            try:
                await run_hooks(app._startup_hooks)
            except Exception as exc:
                logger.exception("Startup hook failed")
                await send({"type": "lifespan.startup.failed", "message": str(exc)})
                return
            await send({"type": "lifespan.startup.complete"})

        elif msg_type == "lifespan.shutdown":
            await run_hooks(app._shutdown_hooks)
            await send({"type": "lifespan.shutdown.complete"})
            return
