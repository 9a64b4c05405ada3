"""Wren application class.

Mutable during setup (route registration, scopes, middleware).
Frozen on the first request, after which registration raises.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.types import Handler, Hook
from wren.config import AppConfig
from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.chain import Chain
from wren.middleware.decoders import BodyDecoder, CookieDecoder, DefaultHeaders, QueryDecoder
from wren.middleware.protocol import Middleware
from wren.routing.methods import Method, MethodSpec, MethodTable
from wren.routing.segments import parse_pattern
from wren.scope import RegistrationScope
from wren.server.dispatch import Dispatcher


class App:
    """The wren application.

    Usage::

        app = App()

        @app.get("/about")
        def about(request, response):
            return "running"

        @app.get("/users/:id")
        def user(request, response):
            return route_param(request, "id")

        with app.namespace("/admin", require_login):
            @app.get("/stats")
            def stats(request, response):
                return 200, "ok"

    Thread safety:
        Setup is single-threaded. The freeze transition uses a Lock +
        double-check so exactly one thread builds the request chain,
        even when several workers receive their first request at once.
        After that the routing tables are only read.
    """

    __slots__ = (
        "_chain",
        "_freeze_lock",
        "_frozen",
        "_middleware_list",
        "_scope",
        "_shutdown_hooks",
        "_startup_hooks",
        "_table",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._table = MethodTable()
        self._scope = RegistrationScope()
        self._middleware_list: list[Middleware] = []
        self._startup_hooks: list[Hook] = []
        self._shutdown_hooks: list[Hook] = []
        self._frozen: bool = False
        self._freeze_lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._chain: Chain | None = None

    # -- Route registration --

    def add_route(self, methods: MethodSpec, path: str, handler: Handler) -> Handler:
        """Register *handler* for every method in *methods* at prefix + *path*.

        Inside ``with_middleware`` blocks the handler is wrapped so the
        current stack runs first. Registering the same method and pattern
        twice replaces the earlier handler.
        """
        self._check_not_frozen()
        pattern = parse_pattern(self._scope.full_path(path))
        self._table.register(methods, pattern, self._scope.wrap(handler))
        return handler

    def route(
        self, path: str, *, methods: MethodSpec = Method.GET
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            path: URL pattern. ``:name`` segments bind route parameters.
            methods: A ``Method``, a method name, or an iterable of either.
                Defaults to GET.
        """

        def decorator(func: Handler) -> Handler:
            return self.add_route(methods, path, func)

        return decorator

    def get(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, methods=Method.GET)

    def post(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, methods=Method.POST)

    def put(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, methods=Method.PUT)

    def patch(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, methods=Method.PATCH)

    update = patch

    def delete(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, methods=Method.DELETE)

    def options(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, methods=Method.OPTIONS)

    def head(self, path: str) -> Callable[[Handler], Handler]:
        return self.route(path, methods=Method.HEAD)

    # -- Scopes --

    @contextmanager
    def namespace(self, prefix: str, *middleware: Middleware) -> Iterator[App]:
        """Prefix every route registered inside the block with *prefix*.

        Extra positional arguments are middleware stages applied to the
        same block, as if nested in ``with_middleware``.
        """
        self._check_not_frozen()
        with self._scope.push_middleware(middleware), self._scope.push_prefix(prefix):
            yield self

    @contextmanager
    def with_middleware(self, *middleware: Middleware) -> Iterator[App]:
        """Run *middleware* in front of every handler registered inside the block."""
        self._check_not_frozen()
        with self._scope.push_middleware(middleware):
            yield self

    def mount(
        self, prefix: str, setup: Callable[[App], object], *middleware: Middleware
    ) -> App:
        """Call ``setup(app)`` inside ``namespace(prefix, *middleware)``.

        Lets a module expose its routes as a plain function::

            def admin_routes(app):
                app.add_route(Method.GET, "/stats", stats)

            app.mount("/admin", admin_routes, require_login)
        """
        with self.namespace(prefix, *middleware):
            setup(self)
        return self

    # -- Middleware --

    def add_middleware(self, middleware: Middleware) -> None:
        """Add an app-wide stage. Runs after the decoders, before dispatch."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    # -- Lifecycle hooks --

    def on_startup(self, func: Hook) -> Hook:
        """Register a sync or async hook run at ASGI lifespan startup."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Hook) -> Hook:
        """Register a sync or async hook run at ASGI lifespan shutdown."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Introspection --

    @property
    def table(self) -> MethodTable:
        return self._table

    @property
    def chain(self) -> Chain:
        """The full request chain. Freezes the app."""
        self._ensure_frozen()
        assert self._chain is not None
        return self._chain

    # -- Request handling --

    def handle(self, request: Request) -> Response:
        """Run *request* through the full chain synchronously.

        Exceptions raised by handlers propagate to the caller.
        """
        return self.chain.execute(request, Response())

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        from wren.server.handler import handle_asgi

        await handle_asgi(self, scope, receive, send)

    # -- Internal --

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Build the request chain. MUST only be called while holding _freeze_lock."""
        cfg = self.config
        self._chain = Chain(
            [
                DefaultHeaders(cfg.default_headers, cfg.server_name),
                QueryDecoder(),
                CookieDecoder(),
                BodyDecoder(cfg.max_content_length),
                *self._middleware_list,
                Dispatcher(self._table),
            ]
        )
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, scopes, and middleware before the first request."
            )
            raise RuntimeError(msg)
