# app/adapters/inbound/api/v1/endpoints/auth_endpoint.py (async version)

import logging
from typing import Any, Dict
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.use_cases.auth_use_cases import AsyncAuthService
from app.adapters.inbound.api.deps import get_session, get_current_user
from app.adapters.inbound.api.pipeline import auth_body, login_body
from app.domain.models.user_domain_model import CurrentUser
from app.shared.middleware.rate_limiting_middleware import auth_rate_limiter
from app.shared.utils.responses import envelope

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register User - Creates a new user",
    description="""
    Creates a new account with role "user" and returns a bearer token.

    - username: 3 to 50 letters, numbers or underscores, unique
    - email: valid address, unique
    - password: minimum of 6 characters
    """,
    responses={
        201: {
            "description": "User created successfully",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "message": "User registered successfully",
                        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "data": {
                            "id": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
                            "username": "alice",
                            "email": "alice@example.com",
                            "role": "user",
                        },
                    }
                }
            }
        },
        400: {"description": "Invalid data, email already registered or username already taken"},
        429: {"description": "Too many requests"},
    }
)
async def register(
        body: Dict[str, Any] = Depends(auth_body),
        _rate_limit: None = Depends(auth_rate_limiter),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncAuthService(db)
    token, user = await service.register(body)
    return envelope("User registered successfully", data=user, token=token)


@router.post(
    "/login",
    summary="Login - Authenticates a user",
    description="Validates username and password and returns a bearer token.",
    responses={
        401: {"description": "Invalid credentials"},
        403: {"description": "Account is deactivated"},
        429: {"description": "Too many requests"},
    }
)
async def login(
        body: Dict[str, Any] = Depends(login_body),
        _rate_limit: None = Depends(auth_rate_limiter),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncAuthService(db)
    token, user = await service.login(body)
    return envelope("Login successful", data=user, token=token)


@router.get(
    "/me",
    summary="Get My Data - Logged in user data",
    description="Returns the authenticated user data via JWT token.",
)
async def get_me(
        _rate_limit: None = Depends(auth_rate_limiter),
        current_user: CurrentUser = Depends(get_current_user),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncAuthService(db)
    return envelope("User retrieved successfully", data=await service.me(current_user))


@router.put(
    "/updatepassword",
    summary="Update Password - Changes the password of the logged in user",
    description="Requires the current password; returns a new bearer token.",
    responses={
        401: {"description": "Current password is incorrect or invalid token"},
    }
)
async def update_password(
        body: Dict[str, Any] = Depends(auth_body),
        _rate_limit: None = Depends(auth_rate_limiter),
        current_user: CurrentUser = Depends(get_current_user),
        db: AsyncSession = Depends(get_session),
):
    service = AsyncAuthService(db)
    token = await service.update_password(current_user, body)
    return envelope("Password updated successfully", token=token)
