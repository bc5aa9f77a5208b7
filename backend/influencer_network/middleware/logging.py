"""
Influencer Network Backend: Access Log Middleware
==================================================

What:  One log line per HTTP request with method, path, status, duration,
       request id and client IP.
How:   Level follows the status code: ERROR for 5xx, WARNING for 4xx,
       INFO otherwise. Health probes are skipped.

Example:
    2026-10-19T10:00:00 [INFO] influencer_network.access: GET /api/clients 200 12.4ms [a1b2c3d4] from 127.0.0.1

Request bodies and Authorization headers are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from influencer_network.middleware.request_id import request_id_var

logger = logging.getLogger("influencer_network.access")

SKIPPED_PATHS = frozenset({"/health", "/api/health"})


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if path in SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
