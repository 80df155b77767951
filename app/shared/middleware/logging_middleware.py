# app/shared/middleware/logging_middleware.py

"""
Access log of the API.

One line per request, written once the response is known. Besides method,
path, status and duration it records who made the request: the client key
used by the rate limiter and, on authenticated routes, the token subject.
Both are left on ``request.state`` by the pipeline stages.
"""

import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


def _fallback_client(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class AsyncRequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request with the identity the pipeline resolved for it.

    Client errors are logged as warnings and server errors as errors, so
    denied or throttled calls stand out from normal traffic.
    """

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        elapsed_ms = (time.time() - start_time) * 1000

        state = request.state
        client = getattr(state, "rate_limit_client", None) or _fallback_client(request)
        parts = [
            f"{request.method} {request.url.path}",
            f"status={response.status_code}",
            f"client={client}",
            f"user={getattr(state, 'user_id', None) or '-'}",
            f"{elapsed_ms:.1f}ms",
        ]

        if settings.ENVIRONMENT != "production":
            remaining = getattr(state, "rate_limit_remaining", None)
            if remaining is not None:
                parts.append(f"quota_left={remaining}")
            cache_status = response.headers.get("X-Cache")
            if cache_status:
                parts.append(f"cache={cache_status}")
            if request.url.query:
                parts.append(f"query={request.url.query}")

        logger.log(_level_for(response.status_code), " | ".join(parts))
        return response
