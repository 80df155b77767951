# app/application/ports/outbound.py

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar('T')


class IRepository(Generic[T], ABC):
    """Generic repository interface."""

    @abstractmethod
    async def get(self, db: Any, id: Any, options: Any = ()) -> Optional[T]:
        """Get entity by ID."""
        pass

    @abstractmethod
    async def get_multi(self, db: Any, *, skip: int = 0, limit: Optional[int] = 100, **filters) -> List[T]:
        """List entities with optional filters."""
        pass

    @abstractmethod
    async def create(self, db: Any, *, obj_in: Dict[str, Any]) -> T:
        """Create a new entity."""
        pass

    @abstractmethod
    async def update(self, db: Any, *, db_obj: T, obj_in: Dict[str, Any]) -> T:
        """Update an existing entity."""
        pass

    @abstractmethod
    async def remove(self, db: Any, *, db_obj: T) -> T:
        """Delete an entity."""
        pass


class IUserRepository(IRepository[T], ABC):
    """User repository interface."""

    @abstractmethod
    async def get_by_username(self, db: Any, username: str) -> Optional[T]:
        """Get user by username."""
        pass

    @abstractmethod
    async def get_by_email(self, db: Any, email: str) -> Optional[T]:
        """Get user by email."""
        pass

    @abstractmethod
    async def is_taken_by_other(self, db: Any, field_name: str, value: Any, exclude_id: Any) -> bool:
        """Whether a different user already holds a unique value."""
        pass

    @abstractmethod
    async def create_with_password(self, db: Any, *, username: str, email: str, password: str,
                                   role: str = "user", is_active: bool = True) -> T:
        """Create user with hashed password."""
        pass

    @abstractmethod
    async def update_password(self, db: Any, *, db_obj: T, new_password: str) -> T:
        """Replace the password hash."""
        pass


class IProductRepository(IRepository[T], ABC):
    """Product repository interface."""

    @abstractmethod
    def listing_query(self, category: Optional[str] = None) -> Any:
        """Query of products, newest first, ready to be paginated."""
        pass

    @abstractmethod
    async def list_by_owner(self, db: Any, owner_id: Any) -> List[T]:
        """Every product created by one user, newest first."""
        pass


class IKeyValueStore(ABC):
    """
    Shared key-value store used by the rate limiter and the response cache.

    Values are JSON-compatible (str, numbers, lists, dicts). Implementations
    may live in process memory or in a distributed store.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Value stored under key, or None if missing or expired."""
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: Optional[float] = None) -> None:
        """Store value under key, expiring after ttl seconds when given."""
        pass

    @abstractmethod
    async def ttl(self, key: str) -> Optional[float]:
        """Seconds left before key expires; None if missing or without expiry."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove key if present."""
        pass

    @abstractmethod
    async def sweep(self) -> int:
        """Drop expired entries; returns how many were removed."""
        pass

    async def close(self) -> None:
        """Release connections held by the store."""
        return None
