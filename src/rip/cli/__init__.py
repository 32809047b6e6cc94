"""rip CLI — route listing and the dev server.

Entry point registered as ``rip`` in ``pyproject.toml``::

    [project.scripts]
    rip = "rip.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``rip`` command."""
    parser = argparse.ArgumentParser(
        prog="rip",
        description="rip — typed routes and content negotiation for REST services.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- rip routes -------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="Show the route tree and endpoints")
    routes_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )

    # -- rip run ----------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the server")
    run_parser.add_argument(
        "app",
        help="Import string (e.g. myapp:app)",
    )
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker count (defaults to AppConfig.workers)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from rip.cli._routes import run_routes

        run_routes(args)
    elif args.command == "run":
        from rip.cli._run import run_server

        run_server(args)
