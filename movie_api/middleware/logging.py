"""
Movie Catalog API — Request Logging Middleware
================================================

What:  One access-log line per HTTP request, with status and duration.
How:   Times the downstream call and logs on the `movie_api.access` logger
       once the response is ready.

Line format:
    GET /Movies/SearchMovies 200 3.4ms [1f0c9a2e]

Levels:
    5xx → ERROR, 4xx → WARNING, everything else → INFO

Only method, path, status, duration and request ID are logged; request
bodies and query strings are not.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from movie_api.middleware.request_id import request_id_var

logger = logging.getLogger("movie_api.access")

# Probed every few seconds by orchestrators; logging them drowns real traffic
UNLOGGED_PATHS = {"/health"}


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status code and duration of each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in UNLOGGED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        rid = request_id_var.get("")
        status = response.status_code
        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s]",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response
