"""
Warehouse — Signals

Material audit trail. Receipts and issues save the material with a new
valuation, so every valuation change lands here as an UPDATE carrying
the old and new amounts.

@file warehouse/signals.py
"""

from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from core.constants import AUDIT_ACTION_CREATE, AUDIT_ACTION_UPDATE
from core.services import AuditService

from .models import Material

_material_before: dict = {}


@receiver(pre_save, sender=Material)
def remember_material_state(sender, instance, update_fields=None, **kwargs):
    if instance._state.adding:
        return
    old = Material.objects.filter(pk=instance.pk).first()
    if old is not None:
        _material_before[str(instance.pk)] = AuditService.snapshot(old, fields=update_fields)


@receiver(post_save, sender=Material)
def audit_material_save(sender, instance, created, update_fields=None, **kwargs):
    actor = getattr(instance, '_current_user', None)
    if created:
        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_CREATE,
            model_name='Material',
            object_id=instance.pk,
            new_values=AuditService.snapshot(instance),
        )
        return

    old = _material_before.pop(str(instance.pk), None) or {}
    new = AuditService.snapshot(instance, fields=update_fields)
    changed = AuditService.changed_keys(old, new)
    if changed:
        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_UPDATE,
            model_name='Material',
            object_id=instance.pk,
            old_values={key: old.get(key) for key in changed},
            new_values={key: new.get(key) for key in changed},
        )
