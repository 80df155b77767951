# app/domain/models/user_domain_model.py

from enum import Enum
from uuid import UUID
from dataclasses import dataclass
from typing import Any, Optional


class Role(str, Enum):
    """Coarse role label carried by every user."""
    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class TokenPayload:
    """Verified claims of a bearer token."""
    subject: str
    role: str
    issued_at: Optional[int] = None
    expires_at: Optional[int] = None


@dataclass
class CurrentUser:
    """
    Identity that survived authentication.

    ``user`` is the record loaded from storage on this request;
    ``token_role`` is the role snapshot embedded in the token at issuance.
    """
    user: Any
    token_role: str
    use_token_role: bool = True

    @property
    def id(self) -> UUID:
        return self.user.id

    @property
    def username(self) -> str:
        return self.user.username

    @property
    def role(self) -> str:
        """Effective role used for authorization decisions."""
        if self.use_token_role:
            return self.token_role
        return self.user.role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value
