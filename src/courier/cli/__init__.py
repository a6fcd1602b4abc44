"""Courier CLI — inspect route tables from the command line.

Entry point registered as ``courier`` in ``pyproject.toml``::

    [project.scripts]
    courier = "courier.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``courier`` command."""
    parser = argparse.ArgumentParser(
        prog="courier",
        description="Courier — route matching and request dispatch.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- courier routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "target",
        help="Import string (e.g. myapp:dispatcher)",
    )

    # -- courier match ----------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Show which route a request reaches")
    match_parser.add_argument(
        "target",
        help="Import string (e.g. myapp:dispatcher)",
    )
    match_parser.add_argument("method", help="HTTP method (GET, POST, PUT, DELETE)")
    match_parser.add_argument("path", help="Request path, query string allowed")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from courier.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from courier.cli._routes import run_match

        run_match(args)
