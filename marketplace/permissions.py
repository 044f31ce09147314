from rest_framework import permissions


class IsAdminOrReadOnly(permissions.BasePermission):
    """
    Read access for everyone, write access for staff users only.
    """

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True

        return bool(request.user and request.user.is_authenticated and request.user.is_staff)
