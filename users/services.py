"""
Users — Service Layer

All user-related business logic. No HTTP context — services receive
plain Python arguments and raise typed exceptions. Create and update
audit entries are written by users.signals; the acting user travels on
the instance as ``_current_user``.

@file users/services.py
"""

import logging

from django.db import transaction

from core.constants import AUDIT_ACTION_SOFT_DELETE
from core.exceptions import (
    BusinessRuleViolation,
    DuplicateResourceError,
    ResourceNotFoundError,
)
from core.services import AuditService

from .access import USERS_PATH, Principal, require_edit
from .models import User

logger = logging.getLogger('mineops')


# ---------------------------------------------------------------------------
# User service
# ---------------------------------------------------------------------------

class UserService:
    """CRUD and lifecycle management for User accounts."""

    @staticmethod
    def _get(user_id) -> User:
        try:
            return User.objects.get(pk=user_id, is_deleted=False)
        except User.DoesNotExist:
            raise ResourceNotFoundError(detail=f'User {user_id} not found.')

    @staticmethod
    def _check_role(role):
        if role is not None and role not in User.RoleChoices.values:
            raise BusinessRuleViolation(detail=f'Rol desconocido: {role}.')

    @staticmethod
    @transaction.atomic
    def create_user(
        *,
        username: str,
        password: str | None = None,
        principal: Principal | None = None,
        actor=None,
        **extra_fields,
    ) -> User:
        require_edit(principal, USERS_PATH)

        if User.objects.filter(username=username).exists():
            raise DuplicateResourceError(detail=f'El usuario {username} ya existe.')
        UserService._check_role(extra_fields.get('role'))

        user = User(username=username, created_by=actor, **extra_fields)
        user.set_password(password)
        user._current_user = actor
        user.save()

        logger.info('User %s created with role %s', user.username, user.role)
        return user

    @staticmethod
    @transaction.atomic
    def update_user(
        *,
        user_id,
        password: str | None = None,
        principal: Principal | None = None,
        actor=None,
        **fields,
    ) -> User:
        require_edit(principal, USERS_PATH)
        user = UserService._get(user_id)

        username = fields.get('username')
        if username and User.objects.filter(username=username).exclude(pk=user.pk).exists():
            raise DuplicateResourceError(detail=f'El usuario {username} ya existe.')
        UserService._check_role(fields.get('role'))

        for attr, value in fields.items():
            setattr(user, attr, value)
        if password:
            user.set_password(password)
        user.updated_by = actor
        user._current_user = actor
        user.save()
        return user

    @staticmethod
    @transaction.atomic
    def delete_user(*, user_id, principal: Principal | None = None, actor=None) -> None:
        """Soft-delete: the account is deactivated and hidden, history keeps resolving."""
        require_edit(principal, USERS_PATH)
        user = UserService._get(user_id)
        if actor is not None and actor.pk == user.pk:
            raise BusinessRuleViolation(detail='No puede eliminar su propia cuenta.')

        user._current_user = actor
        user.soft_delete(actor)

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_SOFT_DELETE,
            model_name='User',
            object_id=str(user.pk),
        )
        logger.info('User %s deleted', user.username)


# ---------------------------------------------------------------------------
# Auth service
# ---------------------------------------------------------------------------

class AuthService:
    """Authentication bookkeeping."""

    @staticmethod
    def log_auth_event(request, *, action: str, user=None, attempted_username: str = ''):
        """Login, logout and failed login. A failed login records the username tried."""
        AuditService.log_request(
            request,
            actor=user,
            action=action,
            model_name='User',
            object_id=user.pk if user else '',
            new_values={'username': attempted_username} if attempted_username else None,
        )
