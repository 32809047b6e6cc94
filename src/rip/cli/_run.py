"""``rip run`` — serve an app with pounce."""

import argparse
import sys

from rip.cli._resolve import resolve_app


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it.

    CLI flags override the app's ``AppConfig``.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from rip.server.dev import run_server as serve

    app._ensure_frozen()
    serve(
        app,
        args.host or app.config.host,
        args.port or app.config.port,
        workers=args.workers if args.workers is not None else app.config.workers,
        reload=app.config.debug,
        log_level=app.config.log_level,
        app_path=args.app,
    )
