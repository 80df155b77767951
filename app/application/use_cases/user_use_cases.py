# app/application/use_cases/user_use_cases.py (async version)

"""
Service for user management.

Administrative operations over every account: listing, lookup,
profile/role/status changes and deletion.
"""

from uuid import UUID
import logging
from typing import Any, Dict, List
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.outbound.persistence.models import User
from app.adapters.outbound.persistence.repositories.user_repository import user_repository
from app.application.ports.inbound import IUserUseCase
from app.application.dtos.user_dto import UserUpdate, UserOutput
from app.domain.exceptions import (
    ResourceNotFoundException,
    ResourceAlreadyExistsException,
    ValidationException,
)
from app.domain.models.user_domain_model import CurrentUser

# Configure logger
logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"


def parse_user_id(user_id: str) -> UUID:
    try:
        return UUID(str(user_id))
    except ValueError:
        raise ResourceNotFoundException(detail=USER_NOT_FOUND)


class AsyncUserService(IUserUseCase):
    """
    Service for user management.

    This class implements the business logic of the admin-only user routes.
    """

    def __init__(self, db_session: AsyncSession):
        """
        Initialize the service with a database session.

        Args:
            db_session: Active AsyncSession
        """
        self.db = db_session

    async def _get_user_by_id(self, user_id: str) -> User:
        """
        Get a user by ID or raise an exception if it doesn't exist.

        Raises:
            ResourceNotFoundException: If the user is not found
        """
        return await user_repository.get_or_404(self.db, parse_user_id(user_id), detail=USER_NOT_FOUND)

    async def list_users(self) -> List[Dict[str, Any]]:
        """Every user, newest first, without passwords."""
        users = await user_repository.list(self.db)
        return [UserOutput.model_validate(u).to_json() for u in users]

    async def get_user(self, user_id: str) -> Dict[str, Any]:
        user = await self._get_user_by_id(user_id)
        return UserOutput.model_validate(user).to_json()

    async def update_user(self, current_user: CurrentUser, user_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        Update username, email, role or active flag of any user.

        Args:
            current_user: Admin performing the change
            user_id: Target user
            body: Sanitized and validated request body

        Returns:
            Updated user

        Raises:
            ResourceNotFoundException: If the user is not found
            ResourceAlreadyExistsException: If username or email belongs to another user
        """
        user = await self._get_user_by_id(user_id)
        data = UserUpdate.parse(body)

        changes: Dict[str, Any] = {}
        if data.username and data.username != user.username:
            if await user_repository.is_taken_by_other(self.db, "username", data.username, user.id):
                raise ResourceAlreadyExistsException(detail="Username already taken")
            changes["username"] = data.username

        if data.email and data.email != user.email:
            if await user_repository.is_taken_by_other(self.db, "email", data.email, user.id):
                raise ResourceAlreadyExistsException(detail="Email already registered")
            changes["email"] = data.email

        if data.role is not None:
            changes["role"] = data.role.value

        if data.is_active is not None:
            changes["is_active"] = data.is_active

        if changes:
            user = await user_repository.update(self.db, db_obj=user, obj_in=changes)
        logger.info(f"User updated: {user.username} (ID: {user.id}) by admin {current_user.id}, fields={sorted(changes)}")

        return UserOutput.model_validate(user).to_json()

    async def delete_user(self, current_user: CurrentUser, user_id: str) -> None:
        """
        Delete a user and, by cascade, their products.

        Raises:
            ValidationException: If the admin targets their own account
            ResourceNotFoundException: If the user is not found
        """
        target_id = parse_user_id(user_id)
        if target_id == current_user.id:
            raise ValidationException(detail="Cannot delete your own account")

        user = await user_repository.get_or_404(self.db, target_id, detail=USER_NOT_FOUND)
        username = user.username
        await user_repository.remove(self.db, db_obj=user)
        logger.info(f"User deleted: {username} (ID: {target_id}) by admin {current_user.id}")
