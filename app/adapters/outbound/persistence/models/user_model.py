# app/adapters/outbound/persistence/models/user_model.py

"""
User model.

Stores identities that can authenticate against the API, together with
their role and active flag.
"""

from sqlalchemy import (
    Column,
    Boolean,
    String,
    DateTime,
    Uuid,
    func,
)
from sqlalchemy.orm import relationship
import uuid
from app.adapters.outbound.persistence.models.base_model import Base, utcnow
from app.domain.models.user_domain_model import Role


class User(Base):
    """
    System user.

    Attributes:
        id: Unique identifier (UUID)
        username: Unique login name
        email: Unique email address
        password: bcrypt hash of the password, never serialized
        role: "user" or "admin"
        is_active: Whether the user may authenticate
        created_at: Creation timestamp
        updated_at: Last update timestamp
        products: Products created by this user
    """
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)
    role = Column(String(20), default=Role.USER.value, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime, onupdate=utcnow)

    products = relationship(
        "Product",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(username={self.username}, role={self.role}, active={self.is_active})>"
