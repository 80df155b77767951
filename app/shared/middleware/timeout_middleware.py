# app/shared/middleware/timeout_middleware.py

"""
Middleware that bounds the time spent on a single request.
"""

import asyncio
import logging
from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware

from app.adapters.configuration.config import settings
from app.shared.middleware.exception_middleware import error_response

# Configure logger
logger = logging.getLogger(__name__)


class AsyncTimeoutMiddleware(BaseHTTPMiddleware):
    """
    Returns 504 instead of hanging when a request exceeds REQUEST_TIMEOUT_SECONDS.
    Work already committed by the handler is not rolled back.
    """

    async def dispatch(self, request: Request, call_next):
        timeout = settings.REQUEST_TIMEOUT_SECONDS
        if not timeout or timeout <= 0:
            return await call_next(request)

        try:
            return await asyncio.wait_for(call_next(request), timeout=timeout)
        except asyncio.TimeoutError:
            logger.error(f"Request timed out after {timeout}s: {request.method} {request.url.path}")
            return error_response(status.HTTP_504_GATEWAY_TIMEOUT, "Request timed out", "REQUEST_TIMEOUT")
