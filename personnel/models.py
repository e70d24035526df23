"""
Personnel — Models

Areas of the mining site and the employees working in them. Areas own
materials and request stock issues; employees receive EPP deliveries.

@file personnel/models.py
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import BaseModel


class Area(BaseModel):
    """Organisational area (Mina, Planta, Mantenimiento...)."""

    name = models.CharField(_('name'), max_length=100, unique=True)
    description = models.TextField(_('description'), blank=True, default='')

    class Meta:
        verbose_name = _('area')
        verbose_name_plural = _('areas')
        ordering = ['name']

    def __str__(self):
        return self.name


class Employee(BaseModel):
    """
    Site employee. Never hard-deleted: removal sets status to `inactivo`
    and hides the employee from lists.
    """

    class StatusChoices(models.TextChoices):
        ACTIVO = 'activo', _('Activo')
        INACTIVO = 'inactivo', _('Inactivo')
        VACACIONES = 'vacaciones', _('Vacaciones')

    dni = models.CharField(_('DNI'), max_length=20, unique=True)
    full_name = models.CharField(_('full name'), max_length=200, db_index=True)
    position = models.CharField(_('position'), max_length=100, blank=True, default='')
    area = models.ForeignKey(
        Area,
        null=True, blank=True,
        on_delete=models.PROTECT,
        related_name='employees',
        verbose_name=_('area'),
    )
    regime = models.CharField(_('regime'), max_length=50, blank=True, default='')
    hire_date = models.DateField(_('hire date'), null=True, blank=True)
    status = models.CharField(
        _('status'), max_length=12,
        choices=StatusChoices.choices, default=StatusChoices.ACTIVO,
        db_index=True,
    )
    phone = models.CharField(_('phone'), max_length=20, blank=True, default='')
    notes = models.TextField(_('notes'), blank=True, default='')

    class Meta:
        verbose_name = _('employee')
        verbose_name_plural = _('employees')
        ordering = ['full_name']

    def __str__(self):
        return f'{self.full_name} ({self.dni})'

    @property
    def is_active(self) -> bool:
        return self.status != self.StatusChoices.INACTIVO
