"""Role-based DRF permissions."""

from rest_framework.permissions import BasePermission

from modules.accounts.models import UserRole


class _HasRole(BasePermission):
    role: str = ""
    message = "Not authorized for this role."

    def has_permission(self, request, view) -> bool:
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and getattr(user, "role", None) == self.role
        )


class IsFarmer(_HasRole):
    role = UserRole.FARMER
    message = "Only farmers can perform this action."


class IsConsumer(_HasRole):
    role = UserRole.CONSUMER
    message = "Only consumers can perform this action."
