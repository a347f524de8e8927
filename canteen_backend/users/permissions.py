# users/permissions.py

from rest_framework.permissions import BasePermission

from users.models import User


# ---------------- BASE ROLE PERMISSION ----------------
class HasRole(BasePermission):
    """
    Base permission to check user role safely.
    Inactive accounts never pass, whatever their role.
    """

    allowed_roles = set()

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and user.is_active
            and getattr(user, "role", None) in self.allowed_roles
        )


# ---------------- ROLE PERMISSIONS ----------------
class IsStudent(HasRole):
    allowed_roles = {User.ROLE_STUDENT}


class IsStandAdmin(HasRole):
    allowed_roles = {User.ROLE_STAND_ADMIN}


class IsAdmin(HasRole):
    allowed_roles = {User.ROLE_ADMIN}
