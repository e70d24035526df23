"""
Users — DRF Permission Classes

Bridges the access gate to DRF views. A view declares the application
section it serves through ``access_path``; safe methods need has_access,
every other method needs can_edit.

Usage::

    class MaterialViewSet(viewsets.ModelViewSet):
        permission_classes = [IsActiveUser, PathAccessPermission]
        access_path = '/almacen'

@file users/permissions.py
"""

from rest_framework.permissions import SAFE_METHODS, BasePermission

from .access import Principal, can_edit, has_access


class IsActiveUser(BasePermission):
    """Requires an authenticated, active, not soft-deleted account."""

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and user.is_active
            and not getattr(user, 'is_deleted', False)
        )


class PathAccessPermission(BasePermission):
    """Evaluates the access gate for ``view.access_path``."""

    message = 'No tiene permisos para acceder a esta sección.'

    def has_permission(self, request, view):
        path = getattr(view, 'access_path', None)
        if path is None:
            return False
        principal = Principal.from_user(request.user)
        if request.method in SAFE_METHODS:
            return has_access(principal.role, path)
        if not can_edit(principal.role, path):
            self.message = 'No tiene permisos para modificar esta sección.'
            return False
        return True
