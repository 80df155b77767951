# app/adapters/inbound/api/v1/router.py

from fastapi import APIRouter
from app.adapters.inbound.api.v1.endpoints import auth_endpoint, product_endpoint, user_endpoint

api_router = APIRouter()

# Incluir os routers dos endpoints
api_router.include_router(auth_endpoint.router, prefix="/auth", tags=["Auth"])
api_router.include_router(product_endpoint.router, prefix="/products", tags=["Products"])
api_router.include_router(user_endpoint.router, prefix="/users", tags=["Users"])
