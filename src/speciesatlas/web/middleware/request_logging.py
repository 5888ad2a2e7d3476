"""Structured request logging middleware for FastAPI."""

import logging
import time
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from speciesatlas.web.core.identity import get_session_id

logger = logging.getLogger(__name__)


class StructuredRequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one structured line per HTTP request.

    Server errors are logged as warnings; everything else at info. Whether
    the caller sent a session id is recorded, never the id itself.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        fields: dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(elapsed_ms, 2),
            "has_session": get_session_id(request) is not None,
        }
        if request.url.query:
            fields["query"] = str(request.url.query)
        if request.client:
            fields["client_host"] = request.client.host

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "%s %s %s",
            request.method,
            request.url.path,
            response.status_code,
            extra=fields,
        )
        return response
