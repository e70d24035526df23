"""
Users — Custom Managers

Accounts are keyed on username. Superusers always carry the admin role so
the access gate treats them consistently even when read from the token.

@file users/managers.py
"""

from django.contrib.auth.models import BaseUserManager
from django.utils.translation import gettext_lazy as _


class UserManager(BaseUserManager):
    use_in_migrations = True

    def _create_user(self, username, password, **extra_fields):
        username = self.model.normalize_username((username or '').strip())
        if not username:
            raise ValueError(_('Username is required.'))
        user = self.model(username=username, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, username, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(username, password, **extra_fields)

    def create_superuser(self, username, password=None, **extra_fields):
        extra_fields.update(is_staff=True, is_superuser=True, role='admin')
        return self._create_user(username, password, **extra_fields)

    def active(self):
        """Accounts that may log in: active and not soft-deleted."""
        return self.filter(is_active=True, is_deleted=False)
