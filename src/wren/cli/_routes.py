"""``wren routes``: list registered routes."""

import argparse
import importlib
import sys
from functools import reduce

from wren.app import App
from wren.errors import ConfigurationError
from wren.routing.methods import Method


def load_app(target: str) -> App:
    """Import ``module:attr`` and return the frozen App it names.

    ``attr`` defaults to ``app`` and may be dotted (``module:site.app``).
    A zero-argument factory is called once. The app is frozen before it is
    returned, so the table printed is exactly the one requests would see.

    Raises:
        ConfigurationError: If the module or attribute can't be found, the
            factory fails, or the result isn't an App.
    """
    module_path, _, attr_path = target.partition(":")
    try:
        module = importlib.import_module(module_path)
        obj = reduce(getattr, (attr_path or "app").split("."), module)
    except (ImportError, AttributeError) as exc:
        msg = f"Cannot load {target!r}: {exc}"
        raise ConfigurationError(msg) from exc

    if not isinstance(obj, App) and callable(obj):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"App factory {target!r} failed: {exc}"
            raise ConfigurationError(msg) from exc

    if not isinstance(obj, App):
        msg = f"{target!r} is a {type(obj).__name__}, expected a wren.App"
        raise ConfigurationError(msg)

    obj._ensure_frozen()
    return obj


def run_routes(args: argparse.Namespace) -> None:
    """Print a METHOD / PATH / HANDLER table for ``args.app``."""
    try:
        app = load_app(args.app)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    only: Method | None = None
    if args.method is not None:
        only = Method.parse(args.method)
        if only is None:
            print(f"Error: unknown HTTP method {args.method!r}", file=sys.stderr)
            raise SystemExit(1)

    rows = [
        (method.value, pattern, getattr(handler, "__name__", repr(handler)))
        for method, pattern, handler in app.table.routes()
        if only is None or method is only
    ]
    if not rows:
        print("No routes registered.")
        return

    rows.sort(key=lambda row: (row[1], row[0]))
    max_method = max(6, *(len(r[0]) for r in rows))  # "METHOD" header
    max_path = max(4, *(len(r[1]) for r in rows))  # "PATH" header

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER"))
    sep_len = max_method + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for method, path, handler_name in rows:
        print(fmt.format(method, path, handler_name))
