# app/shared/middleware/exception_middleware.py

"""
Centralized exception handling.

Known exceptions are rendered by handlers registered on the application;
the middleware is the final catch-all for anything that escapes them.
Every error leaves the API as ``{"success": false, "message": ..., "error": ...}``.
"""

import time
import logging
import traceback
from typing import Callable, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from app.domain.exceptions import AppException
from app.shared.middleware.rate_limiting_middleware import rate_limit_headers
from app.adapters.configuration.config import settings

# Configure logger
logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, code: Optional[str] = None, headers: Optional[dict] = None):
    content = {"success": False, "message": message}
    if code:
        content["error"] = code
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _client(request: Request) -> str:
    return request.client.host if request.client else "N/A"


def _headers(request: Request, exc: Optional[Exception] = None) -> dict:
    headers = rate_limit_headers(request)
    headers.update(getattr(exc, "headers", None) or {})
    return headers


async def app_exception_handler(request: Request, exc: AppException):
    if exc.status_code >= 500:
        logger.error(
            f"Application error: {exc.detail} | Code: {exc.internal_code} | "
            f"Path: {request.url.path} | Cause: {getattr(exc, 'original_error', None)}"
        )
        message = "Internal server error" if settings.ENVIRONMENT == "production" else str(exc.detail)
    else:
        logger.warning(
            f"Application exception: {exc.detail} | Code: {exc.internal_code} | "
            f"Path: {request.url.path} | Client: {_client(request)}"
        )
        message = str(exc.detail)
    return error_response(exc.status_code, message, exc.internal_code, _headers(request, exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = "Route not found"
    else:
        message = str(exc.detail)
    return error_response(exc.status_code, message, headers=_headers(request, exc))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())[1:])
    message = f"{field}: {first.get('msg', 'Invalid input')}" if field else first.get("msg", "Invalid input")
    logger.warning(f"Request validation error: {message} | Path: {request.url.path}")
    return error_response(status.HTTP_400_BAD_REQUEST, message, "VALIDATION_ERROR", _headers(request))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)


class AsyncExceptionMiddleware(BaseHTTPMiddleware):
    """
    Middleware for centralized exception handling.
    Captures exceptions that no handler converted and formats the response.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.time()
        try:
            response = await call_next(request)
            process_time = time.time() - start_time
            response.headers["X-Process-Time"] = str(process_time)
            return response

        except IntegrityError as exc:
            # Concurrent duplicate that slipped past the uniqueness checks
            constraint_name = self._extract_constraint_name(str(exc))
            logger.error(
                f"Integrity error: Type={type(exc).__name__} | "
                f"Constraint={constraint_name or 'N/A'} | "
                f"Path: {request.url.path} | Client: {_client(request)}"
            )
            return error_response(
                status.HTTP_400_BAD_REQUEST,
                "Database integrity error" if settings.ENVIRONMENT == "production" else str(exc.orig),
                "INTEGRITY_ERROR",
                _headers(request),
            )

        except SQLAlchemyError as exc:
            if settings.ENVIRONMENT == "production":
                error_message = "Internal database error"
                logger.error(
                    f"Database error: Type={type(exc).__name__} | "
                    f"Path: {request.url.path} | Client: {_client(request)}"
                )
            else:
                error_message = str(exc)
                logger.error(
                    f"Database error: {str(exc)} | "
                    f"Path: {request.url.path} | Client: {_client(request)}"
                )
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, error_message, "DATABASE_ERROR", _headers(request))

        except Exception as exc:
            if settings.ENVIRONMENT == "production":
                error_message = "Internal server error"
                logger.exception(
                    f"Unhandled exception: Type={type(exc).__name__} | "
                    f"Path: {request.url.path} | Client: {_client(request)}"
                )
            else:
                error_message = str(exc) or "Internal server error"
                logger.exception(
                    f"Unhandled exception: {str(exc)} | "
                    f"Path: {request.url.path} | Client: {_client(request)}\n"
                    f"Traceback: {traceback.format_exc()}"
                )
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR, error_message, "INTERNAL_SERVER_ERROR", _headers(request)
            )

    def _extract_constraint_name(self, error_message: str) -> Optional[str]:
        """
        Attempts to extract the constraint name from an integrity error message.

        Args:
            error_message: The complete error message

        Returns:
            The constraint name or None if not found
        """
        import re

        # Common patterns for different databases
        patterns = [
            r'constraint "(.*?)"',
            r'UNIQUE constraint failed: (.*)',
            r'violates unique constraint "(.*?)"',
        ]

        for pattern in patterns:
            match = re.search(pattern, error_message)
            if match:
                return match.group(1)
        return None
