"""
Notes API - Access Log Middleware
=================================

One line per request on the `notes_api.access` logger:

    GET /api/v1/notes 200 3.2ms module=NoteModule rid=1a2b3c4d

`module` is the feature module that served the request. Routers record
it on request.state.route_owner while the request is routed (see
FeatureModule.mark_request); requests that matched no route show "-".

Requests owned by a quiet owner (health checks, the documentation pages)
are only logged when they fail. Bodies, headers and query strings are
never logged.
"""

import logging
import time
from typing import Iterable, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from notes_api.middleware.request_id import request_id_var

logger = logging.getLogger("notes_api.access")


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access logging keyed by the owning feature module."""

    def __init__(self, app: ASGIApp, quiet_owners: Iterable[str] = ()):
        super().__init__(app)
        self.quiet_owners = frozenset(quiet_owners)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        owner: Optional[str] = getattr(request.state, "route_owner", None)
        status = response.status_code
        if owner in self.quiet_owners and status < 400:
            return response

        rid = request_id_var.get("")
        logger.log(
            _level_for(status),
            "%s %s %d %.1fms module=%s rid=%s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            owner or "-",
            rid,
            extra={
                "request_id": rid,
                "feature_module": owner,
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
