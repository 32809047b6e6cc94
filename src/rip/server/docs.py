"""Documentation endpoint — describes every registered endpoint as JSON.

Served from ``AppConfig.docs_path`` when set. The request bypasses the
router, negotiation, and query validation entirely.
"""

import json as json_module

from rip.http.response import Response
from rip.routing.router import Router


def describe(router: Router) -> dict[str, object]:
    return {
        "endpoints": [
            {
                "pattern": endpoint.pattern,
                "resources": [res.describe() for res in endpoint.resources],
            }
            for endpoint in router.endpoints
        ],
    }


def render_documentation(router: Router) -> Response:
    return Response(
        body=json_module.dumps(describe(router), indent=2),
        content_type="application/json",
    )
