# app/shared/middleware/cache_middleware.py

"""
Read-through response cache for idempotent GET endpoints.

``cached`` wraps the endpoint coroutine and observes the value it returns,
so it runs after every dependency (rate limit, authentication, role
checks) and before serialization. The decorated endpoint must declare
``request: Request`` and ``response: Response`` parameters.

Invalidation is TTL-only: writes do not purge matching entries, so a
cached list or detail may be stale for up to ``ttl`` seconds.
"""

import functools
import json
import logging
from typing import Any, Callable, Optional

from fastapi import Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)

CACHE_HEADER = "X-Cache"

# Headers set by earlier stages that a cache hit must still carry
_SKIPPED_HEADERS = {"content-length", "content-type"}


def build_cache_key(key_prefix: str, request: Request) -> str:
    """Key = prefix + serialized path params + serialized query params."""
    path_params = json.dumps(dict(request.path_params), sort_keys=True, default=str)
    query_params = json.dumps(dict(request.query_params), sort_keys=True)
    return f"{key_prefix}{path_params}{query_params}"


def cached(key_prefix: str, ttl: Optional[int] = None) -> Callable:
    """
    Cache the JSON body returned by an endpoint.

    Args:
        key_prefix: Namespace of the route in the store
        ttl: Seconds an entry stays valid, defaults to CACHE_TTL_SECONDS; 0 disables caching
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            request: Request = kwargs["request"]
            response: Response = kwargs["response"]

            entry_ttl = settings.CACHE_TTL_SECONDS if ttl is None else ttl
            if not settings.CACHE_ENABLED or entry_ttl <= 0:
                return await func(*args, **kwargs)

            store = request.app.state.store
            key = build_cache_key(key_prefix, request)

            try:
                cached_body = await store.get(key)
            except Exception as e:
                logger.warning(f"Cache read failed for key {key}: {e}")
                return await func(*args, **kwargs)

            if cached_body is not None:
                headers = {
                    name: value for name, value in response.headers.items()
                    if name.lower() not in _SKIPPED_HEADERS
                }
                headers[CACHE_HEADER] = "HIT"
                return JSONResponse(content=cached_body, headers=headers)

            body = jsonable_encoder(await func(*args, **kwargs))
            response.headers[CACHE_HEADER] = "MISS"

            try:
                await store.set(key, body, ttl=entry_ttl)
            except Exception as e:
                logger.warning(f"Cache write failed for key {key}: {e}")

            return body

        return wrapper

    return decorator
