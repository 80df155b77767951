# app/application/use_cases/product_use_cases.py (async version)

"""
Service for product management.

Any authenticated user may create products and becomes their owner;
changes require ownership or the admin role.
"""

import logging
from uuid import UUID
from typing import Any, Dict, List, Optional

from fastapi_pagination import Page, Params
from fastapi_pagination.ext.sqlalchemy import apaginate
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.outbound.persistence.models import Product
from app.adapters.outbound.persistence.repositories.product_repository import product_repository
from app.application.ports.inbound import IProductUseCase
from app.application.dtos.product_dto import (
    ProductCreate,
    ProductUpdate,
    ProductOutput,
    ProductWithCreatorOutput,
)
from app.domain.exceptions import (
    ValidationException,
    ResourceNotFoundException,
    PermissionDeniedException,
)
from app.domain.models.user_domain_model import CurrentUser
from app.domain.services.user_service import AccessPolicyService

# Configure logger
logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Product not found"

# Columns that may not be cleared by an update
_REQUIRED_COLUMNS = ("name", "price", "stock")


def parse_product_id(product_id: str) -> UUID:
    """Path ids that are not UUIDs cannot match any product."""
    try:
        return UUID(str(product_id))
    except ValueError:
        raise ResourceNotFoundException(detail=PRODUCT_NOT_FOUND)


class AsyncProductService(IProductUseCase):
    """
    Service for product management.
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    async def _get_product(self, product_id: str, with_owner: bool = False) -> Product:
        pid = parse_product_id(product_id)
        if with_owner:
            product = await product_repository.get_with_owner(self.db, pid)
            if not product:
                raise ResourceNotFoundException(detail=PRODUCT_NOT_FOUND)
            return product
        return await product_repository.get_or_404(self.db, pid, detail=PRODUCT_NOT_FOUND)

    async def list_products(
            self,
            params: Params,
            category: Optional[str] = None,
    ) -> Page:
        """
        List products newest first, with creator summary.

        Args:
            params: Page number and size
            category: Optional exact category filter

        Returns:
            Page whose items are serialized products
        """
        return await apaginate(
            self.db,
            product_repository.listing_query(category or None),
            params,
            transformer=lambda items: [ProductWithCreatorOutput.model_validate(p).to_json() for p in items],
        )

    async def my_products(self, current_user: CurrentUser) -> List[Dict[str, Any]]:
        """Products owned by the authenticated user, newest first."""
        items = await product_repository.list_by_owner(self.db, current_user.id)
        return [ProductOutput.model_validate(p).to_json() for p in items]

    async def get_product(self, product_id: str) -> Dict[str, Any]:
        """
        Get a product with its creator.

        Raises:
            ResourceNotFoundException: If the product doesn't exist
        """
        product = await self._get_product(product_id, with_owner=True)
        return ProductWithCreatorOutput.model_validate(product).to_json()

    async def create_product(self, current_user: CurrentUser, body: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create a product owned by the authenticated user.

        Raises:
            ValidationException: If name or price is missing
        """
        data = ProductCreate.parse(body)
        if not data.name or data.price is None:
            raise ValidationException(detail="Please provide product name and price")

        product = await product_repository.create(
            self.db,
            obj_in={
                "name": data.name,
                "description": data.description,
                "price": data.price,
                "stock": data.stock or 0,
                "category": data.category,
                "owner_id": current_user.id,
            },
        )
        logger.info(f"New product created: {product.name} (ID: {product.id}) by user {current_user.id}")
        return ProductOutput.model_validate(product).to_json()

    async def update_product(
            self,
            current_user: CurrentUser,
            product_id: str,
            body: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Partially update a product.

        Raises:
            ResourceNotFoundException: If the product doesn't exist
            PermissionDeniedException: If the user is neither owner nor admin
        """
        product = await self._get_product(product_id)

        if not AccessPolicyService.can_modify(current_user, product.owner_id):
            logger.warning(f"User {current_user.id} denied update of product {product.id}")
            raise PermissionDeniedException(detail="Not authorized to update this product")

        changes = ProductUpdate.parse(body).changes()
        changes = {
            field: value for field, value in changes.items()
            if value is not None or field not in _REQUIRED_COLUMNS
        }

        product = await product_repository.update(self.db, db_obj=product, obj_in=changes)
        logger.info(f"Product updated: {product.name} (ID: {product.id}) by user {current_user.id}")
        return ProductOutput.model_validate(product).to_json()

    async def delete_product(self, current_user: CurrentUser, product_id: str) -> None:
        """
        Delete a product.

        Raises:
            ResourceNotFoundException: If the product doesn't exist
            PermissionDeniedException: If the user is neither owner nor admin
        """
        product = await self._get_product(product_id)

        if not AccessPolicyService.can_modify(current_user, product.owner_id):
            logger.warning(f"User {current_user.id} denied deletion of product {product.id}")
            raise PermissionDeniedException(detail="Not authorized to delete this product")

        name = product.name
        await product_repository.remove(self.db, db_obj=product)
        logger.info(f"Product deleted: {name} (ID: {product_id}) by user {current_user.id}")
