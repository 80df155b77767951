# app/adapters/outbound/persistence/repositories/user_repository.py

"""
Repository for user operations.

Implements the IUserRepository port on top of async SQLAlchemy.
"""

from typing import Any, Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from app.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from app.adapters.outbound.persistence.models import User
from app.application.ports.outbound import IUserRepository
from app.domain.exceptions import DatabaseOperationException
from app.domain.models.user_domain_model import Role


class AsyncUserCRUD(AsyncCRUDBase[User], IUserRepository):
    """
    Async repository for the User entity.

    Extends AsyncCRUDBase with lookups by username and email and with
    creation of users from a plain text password.
    """

    async def get_by_username(self, db: AsyncSession, username: str) -> Optional[User]:
        """
        Find a user by username.

        Raises:
            DatabaseOperationException: In case of database error
        """
        return await self.get_by_field(db, "username", username)

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        """
        Find a user by email.

        Raises:
            DatabaseOperationException: In case of database error
        """
        return await self.get_by_field(db, "email", email)

    async def is_taken_by_other(self, db: AsyncSession, field_name: str, value: Any, exclude_id: Any) -> bool:
        """
        Check whether another user already uses ``value`` for a unique field.

        Args:
            db: Async database session
            field_name: "username" or "email"
            value: Candidate value
            exclude_id: ID of the user being updated

        Returns:
            True if a different user holds the value
        """
        try:
            column = getattr(User, field_name)
            query = select(User.id).where(column == value, User.id != exclude_id)
            result = await db.execute(query)
            return result.first() is not None
        except SQLAlchemyError as e:
            self.logger.error(f"Error checking {field_name} uniqueness: {e}")
            raise DatabaseOperationException(
                detail=f"Error checking {field_name} uniqueness",
                original_error=e
            )

    async def create_with_password(
            self,
            db: AsyncSession,
            *,
            username: str,
            email: str,
            password: str,
            role: str = Role.USER.value,
            is_active: bool = True,
    ) -> User:
        """
        Create a new user storing only the hash of the password.

        Uniqueness is checked by the caller; a concurrent duplicate that slips
        through surfaces as ResourceAlreadyExistsException from the unique index.
        """
        # Import password manager here to avoid import cycle
        from app.adapters.outbound.security.auth_user_manager import UserAuthManager

        hashed = await UserAuthManager.hash_password(password)
        return await self.create(
            db,
            obj_in={
                "username": username,
                "email": email,
                "password": hashed,
                "role": role,
                "is_active": is_active,
            },
        )

    async def update_password(self, db: AsyncSession, *, db_obj: User, new_password: str) -> User:
        """Replace the stored hash with the hash of ``new_password``."""
        from app.adapters.outbound.security.auth_user_manager import UserAuthManager

        hashed = await UserAuthManager.hash_password(new_password)
        return await self.update(db, db_obj=db_obj, obj_in={"password": hashed})

    async def list(self, db: AsyncSession) -> List[User]:
        """List every user, newest first."""
        return await self.get_multi(db, limit=None, order_by=User.created_at.desc())


# Public instance to be used by use cases
user_repository = AsyncUserCRUD(User)
