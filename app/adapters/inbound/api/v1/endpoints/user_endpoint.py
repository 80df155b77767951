# app/adapters/inbound/api/v1/endpoints/user_endpoint.py (async version)

import logging
from typing import Any, Dict
from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.use_cases.user_use_cases import AsyncUserService
from app.adapters.inbound.api.deps import get_session
from app.adapters.inbound.api.pipeline import auth_body
from app.adapters.outbound.security.permissions import require_admin
from app.domain.models.user_domain_model import CurrentUser
from app.shared.middleware.rate_limiting_middleware import user_rate_limiter
from app.shared.utils.responses import envelope

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    summary="List Users - List all users",
    description="Returns every user, newest first. Only admins have access.",
)
async def list_users(
        _rate_limit: None = Depends(user_rate_limiter),
        current_user: CurrentUser = Depends(require_admin),  # Ensures it's an admin
        db: AsyncSession = Depends(get_session),
):
    service = AsyncUserService(db)
    return envelope("Users retrieved successfully", data=await service.list_users())


@router.get(
    "/{user_id}",
    summary="Get User - A specific user's data",
    responses={404: {"description": "User not found"}},
)
async def get_user(
        user_id: str = Path(..., description="ID of the user"),
        _rate_limit: None = Depends(user_rate_limiter),
        current_user: CurrentUser = Depends(require_admin),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncUserService(db)
    return envelope("User retrieved successfully", data=await service.get_user(user_id))


@router.put(
    "/{user_id}",
    summary="Update User - Update a specific user's data",
    description="Updates username, email, role or active status. Only admins have access.",
)
async def update_user(
        user_id: str = Path(..., description="ID of the user to update"),
        body: Dict[str, Any] = Depends(auth_body),
        _rate_limit: None = Depends(user_rate_limiter),
        current_user: CurrentUser = Depends(require_admin),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncUserService(db)
    user = await service.update_user(current_user, user_id, body)
    return envelope("User updated successfully", data=user)


@router.delete(
    "/{user_id}",
    summary="Delete User - Permanently removes a user and their products",
    responses={
        400: {"description": "Cannot delete your own account"},
        404: {"description": "User not found"},
    },
)
async def delete_user(
        user_id: str = Path(..., description="ID of the user to delete"),
        _rate_limit: None = Depends(user_rate_limiter),
        current_user: CurrentUser = Depends(require_admin),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncUserService(db)
    await service.delete_user(current_user, user_id)
    return envelope("User deleted successfully")
