# hostel_admin/core/middleware.py
"""
HTTP middleware: request correlation IDs and one access-log line per request.
"""
from __future__ import annotations

import re
import time
import uuid
from typing import Callable

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from hostel_admin.core.logging import get_logger, request_id as request_id_var

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"

# Client-supplied IDs are echoed into logs and headers, so only accept safe ones
_CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


def resolve_request_id(supplied: str | None) -> str:
    """Reuse a well-formed client request ID, otherwise mint a UUID4."""
    if supplied and _CLIENT_ID_PATTERN.match(supplied.strip()):
        return supplied.strip()
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with an ID.

    The ID is exposed as ``request.state.request_id``, bound to the logging
    context for the duration of the request and returned in ``X-Request-ID``.
    """

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = resolve_request_id(request.headers.get(self.header_name))
        request.state.request_id = rid
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[self.header_name] = rid
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration; add ``X-Process-Time``."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        context = {"method": request.method, "path": request.url.path}
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"{request.method} {request.url.path} raised {type(exc).__name__}",
                extra={**context, "duration_ms": round((time.perf_counter() - started) * 1000, 2)},
                exc_info=True,
            )
            raise

        elapsed = time.perf_counter() - started
        response.headers[PROCESS_TIME_HEADER] = f"{elapsed:.4f}"

        context.update(status_code=response.status_code, duration_ms=round(elapsed * 1000, 2))
        if response.status_code >= 500:
            logger.error("Request failed", extra=context)
        elif response.status_code >= 400:
            logger.warning("Request rejected", extra=context)
        else:
            logger.info("Request completed", extra=context)
        return response


def register_middlewares(app: FastAPI) -> None:
    """
    Install the middleware stack.

    Starlette runs the last-added middleware first, so RequestIDMiddleware
    wraps AccessLogMiddleware and the access line carries the request ID.
    """
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)


__all__ = [
    "AccessLogMiddleware",
    "RequestIDMiddleware",
    "register_middlewares",
    "resolve_request_id",
]
