# app/adapters/outbound/persistence/repositories/product_repository.py

"""
Repository for product operations.
"""

from typing import Any, List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import Select, select
from sqlalchemy.orm import selectinload

from app.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from app.adapters.outbound.persistence.models import Product
from app.application.ports.outbound import IProductRepository


class AsyncProductCRUD(AsyncCRUDBase[Product], IProductRepository):
    """
    Async repository for the Product entity.
    """

    async def get_with_owner(self, db: AsyncSession, id: UUID) -> Optional[Product]:
        """Get a product with its owner eagerly loaded."""
        return await self.get(db, id, options=[selectinload(Product.owner)])

    def listing_query(self, category: Optional[str] = None) -> Select:
        """
        Query of products, newest first, with owners loaded.

        Paginated by the caller; see app/shared/utils/pagination.py.

        Args:
            category: Optional exact category filter
        """
        query = select(Product).options(selectinload(Product.owner))
        if category:
            query = query.where(Product.category == category)
        return query.order_by(Product.created_at.desc(), Product.id)

    async def list_by_owner(self, db: AsyncSession, owner_id: Any) -> List[Product]:
        """Every product created by ``owner_id``, newest first."""
        return await self.get_multi(
            db,
            limit=None,
            order_by=Product.created_at.desc(),
            owner_id=owner_id,
        )


# Public instance to be used by use cases
product_repository = AsyncProductCRUD(Product)
