"""
JSON envelope shared by every endpoint: {"success", "message", "data"?}.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# Request failures that map to a specific status and a client-facing message.
class ApiError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def envelope(success: bool, message: str, data: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"success": success, "message": message}
    # Empty payloads are left out, same as a missing one.
    if data is not None and data != []:
        body["data"] = jsonable_encoder(data)
    return body


def ok(message: str, data: Any = None) -> JSONResponse:
    return JSONResponse(status_code=200, content=envelope(True, message, data))


def fail(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope(False, message))


async def _api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
    return fail(exc.status_code, exc.message)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("bad_request path=%s errors=%s", request.url.path, exc.errors())
    return fail(400, "Invalid request format")


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
