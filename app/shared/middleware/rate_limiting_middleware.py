# app/shared/middleware/rate_limiting_middleware.py

"""
Per-route request rate limiting.

Each RateLimiter is a FastAPI dependency holding its own configuration
(scope, maximum requests and window). Request timestamps live in the
shared key-value store on ``app.state.store`` so several workers can
share one Redis-backed window.

This is an approximate sliding window: the read-filter-append cycle is
not atomic, so concurrent requests from one client may overcount slightly.
"""

import logging
import random
import time
from typing import Callable, Dict, List, Optional

from fastapi import Request, Response

from app.adapters.configuration.config import settings
from app.domain.exceptions import RateLimitExceededException

# Configure logger
logger = logging.getLogger(__name__)

RATE_LIMIT_HEADER = "X-RateLimit-Remaining"


def get_client_identifier(request: Request) -> str:
    """
    Identify the client for rate limiting.

    Uses the first X-Forwarded-For hop when the deployment trusts its proxy,
    the socket peer address otherwise.
    """
    if settings.TRUST_FORWARDED_FOR:
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"


class RateLimiter:
    """
    Sliding-window limiter keyed by client address.

    Attributes:
        scope: Name separating the windows of independent route families
        max_requests: Requests allowed inside the window
        window_seconds: Length of the trailing window
        sweep_probability: Chance per request of purging expired windows
    """

    def __init__(
            self,
            scope: str,
            max_requests: int,
            window_seconds: float = 60,
            sweep_probability: Optional[float] = None,
            clock: Callable[[], float] = time.time,
    ):
        if max_requests <= 0:
            raise ValueError("max_requests must be positive")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")

        self.scope = scope
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.sweep_probability = (
            settings.RATE_LIMIT_SWEEP_PROBABILITY if sweep_probability is None else sweep_probability
        )
        self._clock = clock

    def _key(self, client: str) -> str:
        return f"ratelimit:{self.scope}:{client}"

    async def hit(self, store, client: str) -> int:
        """
        Register one request from ``client``.

        Returns:
            Requests still allowed in the current window

        Raises:
            RateLimitExceededException: If the client already used its quota
        """
        now = self._clock()
        key = self._key(client)

        timestamps: List[float] = await store.get(key) or []
        recent = [ts for ts in timestamps if now - ts < self.window_seconds]

        if len(recent) >= self.max_requests:
            retry_after = max(1, int(self.window_seconds - (now - recent[0])) + 1)
            logger.warning(f"Rate limit exceeded for client {client} on scope '{self.scope}'")
            raise RateLimitExceededException(retry_after=retry_after)

        recent.append(now)
        await store.set(key, recent, ttl=self.window_seconds)

        if random.random() < self.sweep_probability:
            removed = await store.sweep()
            if removed:
                logger.info(f"Rate limiter sweep removed {removed} stale windows")

        return self.max_requests - len(recent)

    async def __call__(self, request: Request, response: Response) -> None:
        if not settings.RATE_LIMIT_ENABLED:
            return

        client = get_client_identifier(request)
        request.state.rate_limit_client = client
        try:
            remaining = await self.hit(request.app.state.store, client)
        except RateLimitExceededException:
            request.state.rate_limit_remaining = 0
            raise

        # Error handlers build their own response; they read the quota from request.state
        request.state.rate_limit_remaining = remaining
        response.headers[RATE_LIMIT_HEADER] = str(remaining)


def rate_limit_headers(request: Request) -> Dict[str, str]:
    """Quota header for responses built outside the endpoint (error handlers)."""
    remaining = getattr(request.state, "rate_limit_remaining", None)
    if remaining is None:
        return {}
    return {RATE_LIMIT_HEADER: str(remaining)}


# Independent configurations per route family
auth_rate_limiter = RateLimiter("auth", settings.RATE_LIMIT_AUTH, settings.RATE_LIMIT_WINDOW_SECONDS)
product_rate_limiter = RateLimiter("products", settings.RATE_LIMIT_PRODUCTS, settings.RATE_LIMIT_WINDOW_SECONDS)
user_rate_limiter = RateLimiter("users", settings.RATE_LIMIT_USERS, settings.RATE_LIMIT_WINDOW_SECONDS)
