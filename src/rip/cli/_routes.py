"""``rip routes`` — print the route tree and the resources of every endpoint."""

import argparse
import sys

from rip.cli._resolve import resolve_app


def run_routes(args: argparse.Namespace) -> None:
    """Resolve ``args.app``, then print its route tree and a table of
    METHOD, PATH, RESOURCE, and media types.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    endpoints = app.router.endpoints
    if not endpoints:
        print("No endpoints registered.")
        return

    print(app.router.format_tree())
    print()

    rows: list[tuple[str, str, str, str]] = []
    for endpoint in endpoints:
        for res in endpoint.resources:
            media = ", ".join(res.produces)
            if res.consumes:
                media = f"{', '.join(res.consumes)} -> {media}"
            rows.append((res.method, endpoint.pattern, res.__name__, media))

    max_method = max(6, *(len(r[0]) for r in rows))  # "METHOD" header
    max_path = max(4, *(len(r[1]) for r in rows))  # "PATH" header
    max_name = max(8, *(len(r[2]) for r in rows))  # "RESOURCE" header

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{:<{max_name}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "RESOURCE", "MEDIA TYPES"))
    sep_len = max_method + max_path + max_name + 6 + max(len(r[3]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
