"""
Users — Models

Custom User model with UUID PK, username login and a single application
role. The role is what the access gate in users.access evaluates; an
optional link to an Employee ties an account to a person on site.

@file users/models.py
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.models import RegulatedModel
from users.managers import UserManager


class User(AbstractBaseUser, PermissionsMixin, RegulatedModel):
    """
    Application account.

    `role` drives page visibility and edit rights. Superusers are treated
    as `admin` by the access gate whatever their stored role.
    """

    class RoleChoices(models.TextChoices):
        ADMIN = 'admin', _('Administrador')
        GERENTE = 'gerente', _('Gerente')
        GERENCIA = 'gerencia', _('Gerencia')
        LOGISTICA = 'logistica', _('Logística')
        ALMACENERO = 'almacenero', _('Almacenero')
        CONDUCTOR = 'conductor', _('Conductor')
        ASISTENTE_ADMINISTRATIVO = 'asistente_administrativo', _('Asistente administrativo')
        USER = 'user', _('Usuario')

    username = models.CharField(_('username'), max_length=50, unique=True)
    name = models.CharField(_('name'), max_length=150, blank=True)
    role = models.CharField(
        _('role'), max_length=30,
        choices=RoleChoices.choices, default=RoleChoices.USER,
        db_index=True,
    )
    employee = models.ForeignKey(
        'personnel.Employee',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='user_accounts',
        verbose_name=_('employee'),
    )

    is_staff = models.BooleanField(_('staff status'), default=False)
    is_active = models.BooleanField(_('active'), default=True)
    date_joined = models.DateTimeField(_('date joined'), default=timezone.now)

    objects = UserManager()

    USERNAME_FIELD = 'username'
    REQUIRED_FIELDS = []

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['username']

    def __str__(self):
        return self.name or self.username

    def get_full_name(self):
        return self.name or self.username

    def get_short_name(self):
        return self.username

    def soft_delete(self, user=None, extra_fields=()):
        # A deleted account can no longer log in.
        self.is_active = False
        super().soft_delete(user, extra_fields=['is_active', *extra_fields])
