# app/adapters/outbound/persistence/models/__init__.py

"""
Data models module.

Exports every SQLAlchemy model so that importing this package
registers all tables on ``Base.metadata``.
"""

from app.adapters.outbound.persistence.models.base_model import Base
from app.adapters.outbound.persistence.models.user_model import User
from app.adapters.outbound.persistence.models.product_model import Product

__all__ = [
    "Base",
    "User",
    "Product",
]
