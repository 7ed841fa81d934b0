# app/core/middleware.py
import logging
import time
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from app.core.logging import request_id_var

logger = logging.getLogger("app.http")


def _target(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request and turns unhandled exceptions into a generic 500."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("X-Request-Id") or uuid4().hex
        token = request_id_var.set(request_id)
        start = time.perf_counter()
        try:
            logger.info("Incoming %s %s", request.method, _target(request))
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("Unhandled exception while processing %s %s", request.method, _target(request))
                response = JSONResponse(
                    status_code=500,
                    content={"code": "INTERNAL_ERROR", "message": "An unexpected error occurred."},
                )
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "Completed %s %s with status %s in %.1f ms",
                request.method,
                _target(request),
                response.status_code,
                elapsed_ms,
            )
            response.headers["X-Request-Id"] = request_id
            return response
        finally:
            request_id_var.reset(token)
