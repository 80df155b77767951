# app/application/use_cases/auth_use_cases.py (async version)

"""
Service for authentication.

Registration, login, current-user lookup and password change. Every
successful operation that proves the password returns a fresh token.
"""

import logging
from datetime import timedelta
from typing import Any, Dict, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.configuration.config import settings
from app.adapters.outbound.persistence.models import User
from app.adapters.outbound.persistence.repositories.user_repository import user_repository
from app.adapters.outbound.security.auth_user_manager import UserAuthManager
from app.application.ports.inbound import IAuthUseCase
from app.application.dtos.user_dto import (
    RegisterInput,
    LoginInput,
    PasswordUpdateInput,
    PublicUser,
    UserOutput,
)
from app.domain.exceptions import (
    ValidationException,
    ResourceAlreadyExistsException,
    InvalidCredentialsException,
    AccountDeactivatedException,
)
from app.domain.models.user_domain_model import CurrentUser, Role

# Configure logger
logger = logging.getLogger(__name__)


class AsyncAuthService(IAuthUseCase):
    """
    Service for user authentication.
    """

    def __init__(self, db_session: AsyncSession):
        """
        Initialize the service with a database session.

        Args:
            db_session: Active AsyncSession
        """
        self.db = db_session

    async def _issue_token(self, user: User, minutes: int = None) -> str:
        expires = timedelta(minutes=minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        return await UserAuthManager.create_access_token(
            subject=str(user.id),
            role=user.role,
            expires_delta=expires,
        )

    async def register(self, body: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
        """
        Register a new user with role "user".

        Args:
            body: Sanitized and validated request body

        Returns:
            Tuple (token, public user)

        Raises:
            ValidationException: If a required field is missing
            ResourceAlreadyExistsException: If email or username is taken
        """
        data = RegisterInput.parse(body)
        if not data.username or not data.email or not data.password:
            raise ValidationException(detail="Please provide username, email and password")

        if await user_repository.get_by_email(self.db, data.email):
            logger.info(f"Registration rejected, email already registered: {data.email}")
            raise ResourceAlreadyExistsException(detail="Email already registered")

        if await user_repository.get_by_username(self.db, data.username):
            logger.info(f"Registration rejected, username already taken: {data.username}")
            raise ResourceAlreadyExistsException(detail="Username already taken")

        user = await user_repository.create_with_password(
            self.db,
            username=data.username,
            email=data.email,
            password=data.password,
            role=Role.USER.value,
        )
        logger.info(f"User registered: {user.username}")

        token = await self._issue_token(user)
        return token, PublicUser.model_validate(user).to_json()

    async def login(self, body: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
        """
        Authenticate by username and password.

        The password is checked before the active flag, so a deactivated
        account is only revealed to someone who knows its password. The order
        is deliberate: checking the flag first would answer 403 to a wrong
        password and confirm that the account exists.

        Raises:
            ValidationException: If username or password is missing
            InvalidCredentialsException: Unknown user or wrong password
            AccountDeactivatedException: Correct password on a deactivated account
        """
        data = LoginInput.parse(body)
        if not data.username or not data.password:
            raise ValidationException(detail="Please provide username and password")

        user = await user_repository.get_by_username(self.db, data.username)
        if not user:
            await UserAuthManager.verify_against_dummy(data.password)
            logger.warning(f"Failed login attempt for unknown username: {data.username}")
            raise InvalidCredentialsException()

        if not await UserAuthManager.verify_password(data.password, user.password):
            logger.warning(f"Failed login attempt for user: {user.username}")
            raise InvalidCredentialsException()

        if not user.is_active:
            logger.warning(f"Login attempt on deactivated account: {user.username}")
            raise AccountDeactivatedException()

        logger.info(f"User logged in: {user.username}")
        token = await self._issue_token(user)
        return token, PublicUser.model_validate(user).to_json()

    async def me(self, current_user: CurrentUser) -> Dict[str, Any]:
        """Profile of the authenticated user, without the password."""
        return UserOutput.model_validate(current_user.user).to_json()

    async def update_password(self, current_user: CurrentUser, body: Dict[str, Any]) -> str:
        """
        Change the password of the authenticated user.

        Returns:
            A new token with the password-change lifetime

        Raises:
            ValidationException: If a field is missing
            InvalidCredentialsException: If the current password is wrong
        """
        data = PasswordUpdateInput.parse(body)
        if not data.current_password or not data.new_password:
            raise ValidationException(detail="Current password and new password are required")

        user = current_user.user
        if not await UserAuthManager.verify_password(data.current_password, user.password):
            logger.warning(f"Password change with wrong current password: {user.username}")
            raise InvalidCredentialsException(detail="Current password is incorrect")

        user = await user_repository.update_password(self.db, db_obj=user, new_password=data.new_password)
        logger.info(f"Password updated: {user.username}")

        return await self._issue_token(user, settings.PASSWORD_CHANGE_TOKEN_EXPIRE_MINUTES)
