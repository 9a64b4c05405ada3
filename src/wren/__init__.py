"""Wren: routing and request dispatch for small web apps.

Per-method routing tries, an ordered middleware chain, and scoped
route registration, served over ASGI.

Basic usage::

    from wren import App, route_param

    app = App()

    @app.get("/")
    def index(request, response):
        return "Hello, World!"

    @app.get("/users/:id")
    def user(request, response):
        return route_param(request, "id")

Serve ``app`` with any ASGI server.
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "Chain",
    "ConfigurationError",
    "HTTPError",
    "Method",
    "Middleware",
    "Next",
    "Request",
    "Response",
    "WrenError",
    "cookie_param",
    "param",
    "redirect",
    "route_param",
    "unsafe_string",
    "url_param",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name == "App":
        from wren.app import App

        return App

    if name == "AppConfig":
        from wren.config import AppConfig

        return AppConfig

    if name == "Request":
        from wren.http.request import Request

        return Request

    if name in ("Response", "redirect"):
        from wren.http import response as _resp

        return getattr(_resp, name)

    if name == "Method":
        from wren.routing.methods import Method

        return Method

    if name in ("Chain", "Middleware", "Next"):
        import wren.middleware as _mw

        return getattr(_mw, name)

    if name in ("cookie_param", "param", "route_param", "unsafe_string", "url_param"):
        from wren import params as _params

        return getattr(_params, name)

    if name in ("ConfigurationError", "HTTPError", "WrenError"):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
