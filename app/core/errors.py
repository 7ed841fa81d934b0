# app/core/errors.py
"""Application error kinds and their HTTP mapping.

Services raise these; ``register_exception_handlers`` turns them into a
``{"code", "message"}`` JSON body with the matching status code.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.requests import Request

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"
    default_message: str = "An unexpected error occurred."

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHENTICATED"
    default_message = "Invalid credentials"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    default_message = "Resource not found."


class InvalidArgument(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "INVALID_ARGUMENT"
    default_message = "Invalid request."


class InvalidSort(InvalidArgument):
    def __init__(self, sort_by: str):
        self.sort_by = sort_by
        super().__init__(f"Invalid sort property: {sort_by}")


def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code, "message": exc.message},
        headers=headers,
    )


def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = ["%s: %s" % (".".join(str(p) for p in e.get("loc", ())), e.get("msg")) for e in exc.errors()]
    logger.warning("Bad request %s %s: %s", request.method, request.url.path, "; ".join(problems))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "code": InvalidArgument.code,
            "message": "One or more validation errors occurred.",
            "details": jsonable_encoder(exc.errors(), exclude={"input", "ctx", "url"}),
        },
    )


def register_exception_handlers(api: FastAPI) -> None:
    api.add_exception_handler(AppError, handle_app_error)
    api.add_exception_handler(RequestValidationError, handle_validation_error)
