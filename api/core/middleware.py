"""
HTTP middleware: permissive CORS for the browser frontend, plus access logs.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from core.responses import fail

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Max-Age": "3600",
}


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """
    Adds CORS headers to every response.

    Preflight (OPTIONS) requests are answered here with an empty 200 and never
    reach a route handler. Unexpected errors become a 500 envelope here, inside
    the middleware stack, so they carry the headers too.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
                response = fail(500, "Internal server error")
        response.headers.update(CORS_HEADERS)
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "request method=%s path=%s status=%s duration_ms=%d",
            request.method,
            request.url.path,
            response.status_code,
            int((time.perf_counter() - start) * 1000),
        )
        return response
