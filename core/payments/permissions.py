from rest_framework.permissions import BasePermission


class IsPrivilegedRole(BasePermission):
    """Allows access only to admins: profile role admin/super_admin or Django staff."""

    message = "You are not authorized to view payment reports."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if user.is_staff or user.is_superuser:
            return True
        profile = getattr(user, "profile", None)
        return bool(profile and profile.is_privileged)
