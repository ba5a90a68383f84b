"""Structured JSON error responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class APIError(Exception):
    """An error to be returned to the client as ``{"code", "message"}``."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


def error_response(code: int, message: str) -> JSONResponse:
    if code >= 500:
        logger.error("Server error occurred", extra={"error_code": code, "error_msg": message})
    elif code >= 400:
        logger.warning("Client error occurred", extra={"error_code": code, "error_msg": message})
    return JSONResponse(status_code=code, content={"code": code, "message": message})


async def _api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return error_response(exc.code, exc.message)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(400, "invalid request")


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
