from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from jobly.api.observability.metrics import (
    HTTP_REQUESTS_TOTAL,
    HTTP_REQUEST_DURATION_SECONDS,
    normalize_path,
)

log = logging.getLogger("jobly.request")

REQUEST_ID_HEADER = "X-Request-Id"


def _request_line(**fields: Any) -> None:
    # one line per request; the Authorization header is never included
    log.info("%s", {"event": "request", **fields})


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an id (caller's X-Request-Id or a fresh uuid4),
    echoes it on the response, records jobly_http_* metrics and writes the
    request log line.

    Sits outside AuthMiddleware, so request.state.identity is read only
    after the handler ran.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = rid

        started = time.perf_counter()
        resp = await call_next(request)
        elapsed = time.perf_counter() - started
        resp.headers[REQUEST_ID_HEADER] = rid

        route = normalize_path(request.url.path)
        method = request.method.upper()
        HTTP_REQUESTS_TOTAL.labels(method=method, path=route, status=str(resp.status_code)).inc()
        HTTP_REQUEST_DURATION_SECONDS.labels(method=method, path=route).observe(elapsed)

        identity = getattr(request.state, "identity", None)
        _request_line(
            request_id=rid,
            method=method,
            path=request.url.path,
            status_code=resp.status_code,
            duration_ms=int(elapsed * 1000),
            sub=identity.subject_id if identity else None,
            admin=identity.is_admin if identity else None,
        )
        return resp
