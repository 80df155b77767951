# app/application/use_cases/__init__.py (async version)

"""
Application service module.

This package contains the application services that implement the business logic
of the application, organized according to functional domains.
"""

# Export service classes for easier imports
from app.application.use_cases.auth_use_cases import AsyncAuthService
from app.application.use_cases.product_use_cases import AsyncProductService
from app.application.use_cases.user_use_cases import AsyncUserService

# Export all services
__all__ = [
    "AsyncAuthService",
    "AsyncProductService",
    "AsyncUserService",
]
