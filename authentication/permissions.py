from rest_framework.permissions import SAFE_METHODS, BasePermission

from utils.rbac import ROLE_ADMIN, is_admin, log_denial


class IsAdminRole(BasePermission):
    """Allow access only to users with the admin role (or superusers)."""

    message = "Admin role required."

    def has_permission(self, request, view):
        allowed = is_admin(request.user)
        if not allowed and getattr(request.user, "is_authenticated", False):
            log_denial(request.user, ROLE_ADMIN)
        return allowed


class IsAdminOrReadOnly(BasePermission):
    """Public reads, admin-only writes."""

    message = "Admin role required."

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return is_admin(request.user)
