"""
Role based permission classes.
"""
from rest_framework.permissions import BasePermission

from .models import User


def _role(request):
    user = getattr(request, "user", None)
    if not (user and user.is_authenticated):
        return None
    return getattr(user, "role", None)


class IsAdminRole(BasePermission):
    """Allow access only to administrators."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _role(request) == User.ROLE_ADMIN


class IsHospitalOrAdmin(BasePermission):
    """Hospitals manage records and stock; administrators may act for any hospital."""
    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _role(request) in {User.ROLE_HOSPITAL, User.ROLE_ADMIN}
