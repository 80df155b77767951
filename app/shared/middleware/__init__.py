# app/shared/middleware/__init__.py

from app.shared.middleware.exception_middleware import AsyncExceptionMiddleware, register_exception_handlers
from app.shared.middleware.logging_middleware import AsyncRequestLoggingMiddleware
from app.shared.middleware.timeout_middleware import AsyncTimeoutMiddleware
from app.shared.middleware.rate_limiting_middleware import (
    RateLimiter,
    auth_rate_limiter,
    product_rate_limiter,
    user_rate_limiter,
)
from app.shared.middleware.cache_middleware import cached

# Export all for easy imports
__all__ = [
    "AsyncExceptionMiddleware",
    "AsyncRequestLoggingMiddleware",
    "AsyncTimeoutMiddleware",
    "register_exception_handlers",
    "RateLimiter",
    "auth_rate_limiter",
    "product_rate_limiter",
    "user_rate_limiter",
    "cached",
]
