"""The dispatcher: last stage of the application chain.

Splits the routed path, looks up the method's trie, binds route
parameters, calls the handler, and normalizes what it returns. Any miss,
including an unknown method, is a plain 404.
"""

import logging

from wren.http.request import ROUTE_PARAMS, Request
from wren.http.response import Response
from wren.http.results import prepare_response
from wren.middleware.protocol import Next
from wren.routing.methods import MethodTable
from wren.routing.segments import split_path

logger = logging.getLogger("wren.server")


class Dispatcher:
    """Route the request through a ``MethodTable``.

    Never calls ``next``: whatever follows the dispatcher in a chain is
    unreachable.
    """

    __slots__ = ("table",)

    def __init__(self, table: MethodTable) -> None:
        self.table = table

    def __call__(self, request: Request, response: Response, next: Next) -> Response:
        match = self.table.lookup(request.method, split_path(request.resource))
        if match.handler is None:
            logger.debug("404 %s %s", request.method, request.resource)
            return Response(status=404)

        request.state[ROUTE_PARAMS] = dict(match.params)
        return prepare_response(match.handler(request, response), response)
