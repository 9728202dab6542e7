"""FastAPI middleware for observability.

Provides request ID generation, request logging and HTTP metrics.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .logging_config import get_logger
from .metrics import http_request_duration_seconds, http_requests_total
from .request_id import REQUEST_ID_HEADER, generate_request_id, set_request_id

logger = get_logger(__name__)


def _route_label(request: Request) -> str:
    """Route template (e.g. /api/documents/{document_id}) to keep label cardinality low."""
    route = request.scope.get("route")
    return getattr(route, "path", "unmatched")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware to generate and inject request IDs."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request with request ID.

        Returns:
            Response: HTTP response with X-Request-ID header
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        set_request_id(request_id)

        start_time = time.time()
        logger.info(
            f"{request.method} {request.url.path}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "client_ip": request.client.host if request.client else None,
            }
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"Request failed: {str(e)}",
                extra={
                    "error_type": type(e).__name__,
                    "duration_ms": round(duration_ms, 2),
                },
                exc_info=True
            )
            raise

        duration = time.time() - start_time
        route = _route_label(request)
        http_requests_total.labels(
            method=request.method, route=route, status_code=str(response.status_code)
        ).inc()
        http_request_duration_seconds.labels(method=request.method, route=route).observe(duration)

        logger.info(
            f"Request completed: {response.status_code}",
            extra={
                "status_code": response.status_code,
                "duration_ms": round(duration * 1000, 2),
            }
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
