# app/domain/exceptions.py

"""
Custom exceptions for the application.

Every exception carries the HTTP status it maps to and a stable
``internal_code`` that is returned to clients in the ``error`` field
of the response envelope.
"""

from fastapi import HTTPException, status
from typing import Any, Dict, Optional


class AppException(HTTPException):
    """
    Base exception for all application errors.
    Extends FastAPI's HTTPException to provide additional context.
    """

    def __init__(
            self,
            status_code: int,
            detail: Any = None,
            headers: Optional[Dict[str, Any]] = None,
            internal_code: Optional[str] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.internal_code = internal_code

    def __str__(self) -> str:
        return str(self.detail)


class ValidationException(AppException):
    """Malformed or out-of-range input."""

    def __init__(self, detail: str = "Invalid input data"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            internal_code="VALIDATION_ERROR"
        )


class ResourceAlreadyExistsException(AppException):
    """Unique field (username, email) already taken."""

    def __init__(self, detail: str = "Resource already exists"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            internal_code="RESOURCE_ALREADY_EXISTS"
        )


class ResourceNotFoundException(AppException):
    """Resource not found."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            internal_code="RESOURCE_NOT_FOUND"
        )


class InvalidCredentialsException(AppException):
    """Wrong username or password."""

    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            internal_code="INVALID_CREDENTIALS"
        )


class AuthenticationException(AppException):
    """Missing, invalid or expired bearer token, or unknown/inactive subject."""

    def __init__(self, detail: str = "Not authorized to access this route"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
            internal_code="AUTHENTICATION_FAILED"
        )


class AccountDeactivatedException(AppException):
    """Login attempted on a deactivated account."""

    def __init__(self, detail: str = "Account is deactivated"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            internal_code="ACCOUNT_DEACTIVATED"
        )


class PermissionDeniedException(AppException):
    """Role or ownership mismatch."""

    def __init__(self, detail: str = "Permission denied"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            internal_code="PERMISSION_DENIED"
        )


class RateLimitExceededException(AppException):
    """Too many requests from the same client inside the window."""

    def __init__(self, detail: str = "Too many requests. Please try again later.", retry_after: int = 60):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=detail,
            headers={"Retry-After": str(retry_after)},
            internal_code="RATE_LIMIT_EXCEEDED"
        )


class DatabaseOperationException(AppException):
    """Error in a database operation."""

    def __init__(self, detail: str = "Error executing database operation",
                 original_error: Optional[Exception] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            internal_code="DATABASE_OPERATION_ERROR"
        )
        self.original_error = original_error
