# app/domain/__init__.py

"""
Domain components of the application.

This module exports the exception taxonomy and the domain models.
"""

from app.domain.exceptions import (
    AppException,
    ValidationException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
    InvalidCredentialsException,
    AuthenticationException,
    AccountDeactivatedException,
    PermissionDeniedException,
    RateLimitExceededException,
    DatabaseOperationException,
)
from app.domain.models.user_domain_model import Role, TokenPayload, CurrentUser
