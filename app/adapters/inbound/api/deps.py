# app/adapters/inbound/api/deps.py (async version)

"""
Dependencies for injection into API endpoints.

This module defines functions that provide dependencies via
FastAPI Depends() for authentication and database access.
"""

import logging
from typing import Optional
from uuid import UUID
from fastapi import Depends, Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.configuration.config import settings
from app.adapters.outbound.persistence.database import get_db
from app.adapters.outbound.persistence.repositories.user_repository import user_repository
from app.adapters.outbound.security.auth_user_manager import UserAuthManager
from app.domain.exceptions import AuthenticationException
from app.domain.models.user_domain_model import CurrentUser

# Configure logger
logger = logging.getLogger(__name__)

# Missing credentials are reported through AuthenticationException, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)

########################################################################
# Database Session Management
########################################################################

get_session = get_db


########################################################################
# User Token Authentication
########################################################################

async def get_current_user(
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
        db: AsyncSession = Depends(get_session),
) -> CurrentUser:
    """
    Get the current user from the bearer token.

    The user is reloaded on every request, so deactivation or deletion
    takes effect immediately even for tokens that have not expired.

    Args:
        request: Current request; the subject is recorded for the access log
        credentials: Authorization credentials with bearer token
        db: Async database session

    Returns:
        CurrentUser with the loaded user and the role claim of the token

    Raises:
        AuthenticationException: If the token is missing or invalid, or the user doesn't exist/is inactive
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationException(detail="Not authorized to access this route")

    payload = await UserAuthManager.verify_access_token(credentials.credentials)

    try:
        user_id = UUID(payload.subject)
    except (ValueError, TypeError):
        logger.warning(f"Invalid token: 'sub' is not a valid UUID ({payload.subject})")
        raise AuthenticationException(detail="Invalid token")

    user = await user_repository.get(db, user_id)
    if not user:
        logger.warning(f"Token subject {user_id} no longer exists")
        raise AuthenticationException(detail="User not found")

    if not user.is_active:
        logger.warning(f"Token used by deactivated user {user.username}")
        raise AuthenticationException(detail="User account is deactivated")

    request.state.user_id = str(user.id)

    return CurrentUser(
        user=user,
        token_role=payload.role,
        use_token_role=settings.AUTHORIZE_WITH_TOKEN_ROLE,
    )
