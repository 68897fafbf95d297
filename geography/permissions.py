"""
Geography — Permissions

Geographic reference data is read-only for field staff. Only staff
accounts can modify it.

@file geography/permissions.py
"""

from rest_framework.permissions import SAFE_METHODS, BasePermission


class CanModifyGeography(BasePermission):
    """Staff and superusers can create/edit geography."""

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        user = request.user
        return bool(user and (user.is_superuser or user.is_staff))
