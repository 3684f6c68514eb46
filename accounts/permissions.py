"""
Custom permissions for role-based access
"""
from rest_framework import permissions

from .models import User


class IsTeacherOrAdmin(permissions.BasePermission):
    """Staff who may schedule lessons and mark registers"""

    def has_permission(self, request, view):
        return (
            request.user and
            request.user.is_authenticated and
            request.user.role in (User.ROLE_TEACHER, User.ROLE_ADMIN)
        )
