# app/application/ports/inbound.py

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from fastapi_pagination import Page, Params

from app.domain.models.user_domain_model import CurrentUser


class IAuthUseCase(ABC):
    """Interface for authentication use cases."""

    @abstractmethod
    async def register(self, body: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
        """Register a new user, returning token and public user."""
        pass

    @abstractmethod
    async def login(self, body: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
        """Authenticate a user, returning token and public user."""
        pass

    @abstractmethod
    async def me(self, current_user: CurrentUser) -> Dict[str, Any]:
        """Profile of the authenticated user."""
        pass

    @abstractmethod
    async def update_password(self, current_user: CurrentUser, body: Dict[str, Any]) -> str:
        """Change the password and return a new token."""
        pass


class IProductUseCase(ABC):
    """Interface for product use cases."""

    @abstractmethod
    async def list_products(self, params: Params, category: Optional[str] = None) -> Page:
        """Page of serialized products."""
        pass

    @abstractmethod
    async def my_products(self, current_user: CurrentUser) -> List[Dict[str, Any]]:
        """Products owned by the caller."""
        pass

    @abstractmethod
    async def get_product(self, product_id: str) -> Dict[str, Any]:
        """Product by ID."""
        pass

    @abstractmethod
    async def create_product(self, current_user: CurrentUser, body: Dict[str, Any]) -> Dict[str, Any]:
        """Create a product owned by the caller."""
        pass

    @abstractmethod
    async def update_product(self, current_user: CurrentUser, product_id: str,
                             body: Dict[str, Any]) -> Dict[str, Any]:
        """Partially update a product (owner or admin)."""
        pass

    @abstractmethod
    async def delete_product(self, current_user: CurrentUser, product_id: str) -> None:
        """Delete a product (owner or admin)."""
        pass


class IUserUseCase(ABC):
    """Interface for user administration use cases."""

    @abstractmethod
    async def list_users(self) -> List[Dict[str, Any]]:
        """Every user, newest first."""
        pass

    @abstractmethod
    async def get_user(self, user_id: str) -> Dict[str, Any]:
        """User by ID."""
        pass

    @abstractmethod
    async def update_user(self, current_user: CurrentUser, user_id: str, body: Dict[str, Any]) -> Dict[str, Any]:
        """Update username, email, role or active flag."""
        pass

    @abstractmethod
    async def delete_user(self, current_user: CurrentUser, user_id: str) -> None:
        """Delete a user other than the caller."""
        pass
