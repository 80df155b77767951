# app/adapters/outbound/persistence/repositories/__init__.py

"""
CRUD (Create, Read, Update, Delete) module.

This module exports classes and instances of the repositories
for the system entities, implementing the Repository pattern.
"""

from app.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from app.adapters.outbound.persistence.repositories.user_repository import AsyncUserCRUD, user_repository
from app.adapters.outbound.persistence.repositories.product_repository import AsyncProductCRUD, product_repository

__all__ = [
    # Classes
    "AsyncCRUDBase",
    "AsyncUserCRUD",
    "AsyncProductCRUD",

    # Instances
    "user_repository",
    "product_repository",
]
