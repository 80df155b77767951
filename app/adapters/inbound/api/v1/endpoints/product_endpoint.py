# app/adapters/inbound/api/v1/endpoints/product_endpoint.py (async version)

import logging
from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, Path, Query, Request, Response, status
from fastapi_pagination import Params
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.use_cases.product_use_cases import AsyncProductService
from app.adapters.inbound.api.deps import get_session, get_current_user
from app.adapters.inbound.api.pipeline import product_body
from app.adapters.outbound.security.permissions import require_admin
from app.domain.models.user_domain_model import CurrentUser
from app.shared.middleware.cache_middleware import cached
from app.shared.middleware.rate_limiting_middleware import product_rate_limiter
from app.shared.utils.pagination import pagination_params, pagination_meta
from app.shared.utils.responses import envelope

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    summary="List Products - Paginated product list",
    description="Returns products newest first with their creator. Responses are cached for a short time.",
)
@cached("products:")
async def list_products(
        request: Request,
        response: Response,
        _rate_limit: None = Depends(product_rate_limiter),
        current_user: CurrentUser = Depends(get_current_user),
        db: AsyncSession = Depends(get_session),
        params: Params = Depends(pagination_params),
        category: Optional[str] = Query(None, description="Exact category filter"),
):
    service = AsyncProductService(db)
    page = await service.list_products(params, category=category)
    return envelope("Products retrieved successfully", data=page.items, pagination=pagination_meta(page))


@router.get(
    "/my-products",
    summary="My Products - Products created by the logged in user",
)
async def my_products(
        _rate_limit: None = Depends(product_rate_limiter),
        current_user: CurrentUser = Depends(get_current_user),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncProductService(db)
    return envelope("Your products retrieved successfully", data=await service.my_products(current_user))


@router.get(
    "/{product_id}",
    summary="Get Product - Product detail",
    responses={404: {"description": "Product not found"}},
)
@cached("product:")
async def get_product(
        request: Request,
        response: Response,
        product_id: str = Path(..., description="ID of the product"),
        _rate_limit: None = Depends(product_rate_limiter),
        current_user: CurrentUser = Depends(get_current_user),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncProductService(db)
    return envelope("Product retrieved successfully", data=await service.get_product(product_id))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Product - The logged in user becomes the owner",
)
async def create_product(
        body: Dict[str, Any] = Depends(product_body),
        _rate_limit: None = Depends(product_rate_limiter),
        current_user: CurrentUser = Depends(get_current_user),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncProductService(db)
    product = await service.create_product(current_user, body)
    return envelope("Product created successfully", data=product)


@router.put(
    "/{product_id}",
    summary="Update Product - Owner or admin only",
    responses={
        403: {"description": "Not authorized to update this product"},
        404: {"description": "Product not found"},
    },
)
async def update_product(
        product_id: str = Path(..., description="ID of the product"),
        body: Dict[str, Any] = Depends(product_body),
        _rate_limit: None = Depends(product_rate_limiter),
        current_user: CurrentUser = Depends(get_current_user),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncProductService(db)
    product = await service.update_product(current_user, product_id, body)
    return envelope("Product updated successfully", data=product)


@router.delete(
    "/{product_id}",
    summary="Delete Product - Admin only",
    responses={
        403: {"description": "Admin role required"},
        404: {"description": "Product not found"},
    },
)
async def delete_product(
        product_id: str = Path(..., description="ID of the product"),
        _rate_limit: None = Depends(product_rate_limiter),
        current_user: CurrentUser = Depends(require_admin),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncProductService(db)
    await service.delete_product(current_user, product_id)
    return envelope("Product deleted successfully")
