# app/adapters/outbound/security/permissions.py (async version)

import logging
from fastapi import Depends

from app.adapters.inbound.api.deps import get_current_user
from app.domain.exceptions import PermissionDeniedException
from app.domain.models.user_domain_model import CurrentUser, Role
from app.domain.services.user_service import AccessPolicyService

logger = logging.getLogger(__name__)


def require_role(role: str):
    """
    Returns a dependency that validates if the authenticated user holds ``role``.
    Single-role check: no hierarchy between roles.

    Usage:
        @router.get(..., dependencies=[Depends(require_role("admin"))])
    """
    required = role.value if isinstance(role, Role) else role

    async def role_checker(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if not AccessPolicyService.has_role(current_user, required):
            logger.warning(
                f"Role '{current_user.role}' of user {current_user.username} denied, route requires '{required}'"
            )
            raise PermissionDeniedException(
                detail=f"User role '{current_user.role}' is not authorized to access this route"
            )
        return current_user

    return role_checker


# Validates if the authenticated user is an admin, raises HTTP 403 if not
require_admin = require_role(Role.ADMIN)
