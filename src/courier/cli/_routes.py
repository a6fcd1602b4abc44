"""``courier routes`` and ``courier match`` — inspect a route table.

``routes`` prints every route in registration order, which is also the
order in which they are tried. ``match`` shows the route a request
would reach and the parameters it binds.
"""

import argparse
import sys
from urllib.parse import urlsplit

from courier.cli._resolve import resolve_table
from courier.routing.table import RouteTable


def _load(target: str) -> RouteTable:
    try:
        return resolve_table(target)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def _handler_name(route_handler: object, name: str | None) -> str:
    handler_name = getattr(route_handler, "__name__", str(route_handler))
    if name:
        handler_name = f"{handler_name} ({name})"
    return handler_name


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of METHOD, PATH, and handler name."""
    table = _load(args.target)

    routes = table.routes
    if not routes:
        print("No routes registered.")
        return

    rows = [
        (route.method, route.template, _handler_name(route.handler, route.name))
        for route in routes
    ]

    max_method = max(6, *(len(r[0]) for r in rows))  # "METHOD" header
    max_path = max(4, *(len(r[1]) for r in rows))  # "PATH" header

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER"))
    sep_len = max_method + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for method, path, handler_name in rows:
        print(fmt.format(method, path, handler_name))


def run_match(args: argparse.Namespace) -> None:
    """Print the winning route and its params; exit 1 when nothing matches."""
    table = _load(args.target)
    method = args.method.upper()
    path = urlsplit(args.path).path or "/"

    match = table.find(method, path)
    if match is None:
        print(f"No route matches {method} {path}", file=sys.stderr)
        raise SystemExit(1)

    route = match.route
    print(f"{route.method} {route.template} -> {_handler_name(route.handler, route.name)}")
    for key, value in match.path_params.items():
        print(f"  {key} = {value}")
