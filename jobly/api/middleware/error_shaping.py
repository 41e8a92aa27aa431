from __future__ import annotations

import logging
import traceback
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from jobly.core.errors import JoblyError

log = logging.getLogger("jobly.errors")


def error_response(message: str, status: int) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": {"message": message, "status": status}})


class SafeErrorMiddleware(BaseHTTPMiddleware):
    """
    - Never return stack traces to clients
    - Preserve request_id if present
    - Log traceback server-side
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            rid = getattr(request.state, "request_id", None) or request.headers.get("x-request-id")
            log.error(
                "Unhandled error: %s rid=%s path=%s\n%s",
                str(e),
                rid,
                request.url.path,
                traceback.format_exc(),
            )
            payload = {"error": {"message": "Internal Server Error", "status": 500}}
            if rid:
                payload["request_id"] = rid
            return JSONResponse(status_code=500, content=payload)


async def _jobly_error(request: Request, exc: JoblyError) -> JSONResponse:
    return error_response(exc.message, exc.status)


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    msgs = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msgs.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return error_response("; ".join(msgs) or "Bad Request", 400)


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(str(exc.detail), exc.status_code)


def install_error_handlers(app: FastAPI) -> None:
    """Every handled error leaves as {"error": {"message", "status"}}."""
    app.add_exception_handler(JoblyError, _jobly_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
