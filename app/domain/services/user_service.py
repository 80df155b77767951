# app/domain/services/user_service.py

from typing import Any

from app.domain.models.user_domain_model import CurrentUser, Role


class AccessPolicyService:
    """
    Domain service for role and ownership checks.
    """

    @staticmethod
    def has_role(current: CurrentUser, required_role: str) -> bool:
        """
        Single-role check, no hierarchy: an admin does not implicitly hold "user".

        Args:
            current: Authenticated identity
            required_role: Role label the route requires

        Returns:
            True if the effective role equals the required one
        """
        if isinstance(required_role, Role):
            required_role = required_role.value
        return current.role == required_role

    @staticmethod
    def can_modify(current: CurrentUser, owner_id: Any) -> bool:
        """
        Owner-or-admin rule applied before mutating a product.

        Args:
            current: Authenticated identity
            owner_id: Owner of the resource

        Returns:
            True if the identity owns the resource or is an admin
        """
        return owner_id == current.id or current.is_admin
