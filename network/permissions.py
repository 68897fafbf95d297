"""
Network — Permissions

@file network/permissions.py
"""

from rest_framework.permissions import SAFE_METHODS, BasePermission


class CanManageNetwork(BasePermission):
    """Any authenticated user can read; staff manage nodes."""

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        user = request.user
        return bool(user and (user.is_superuser or user.is_staff))
