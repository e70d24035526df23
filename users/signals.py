"""
Users — Signals

Account audit trail. Creations store the full snapshot, updates only the
fields that changed. Password hashes, login timestamps and permission
sets never reach the log.

The acting user is read from ``instance._current_user`` (set by
users.services); saves made outside the services are logged without an
actor.

@file users/signals.py
"""

from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from core.constants import AUDIT_ACTION_CREATE, AUDIT_ACTION_UPDATE
from core.services import AuditService
from users.models import User

SNAPSHOT_EXCLUDE = ['password', 'last_login', 'groups', 'user_permissions']

_before_save: dict = {}


@receiver(pre_save, sender=User)
def remember_user_state(sender, instance, **kwargs):
    if instance._state.adding:
        return
    old = User.objects.filter(pk=instance.pk).first()
    if old is not None:
        _before_save[str(instance.pk)] = AuditService.snapshot(old, exclude=SNAPSHOT_EXCLUDE)


@receiver(post_save, sender=User)
def audit_user_save(sender, instance, created, **kwargs):
    new_values = AuditService.snapshot(instance, exclude=SNAPSHOT_EXCLUDE)
    actor = getattr(instance, '_current_user', None)

    if created:
        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_CREATE,
            model_name='User',
            object_id=instance.pk,
            new_values=new_values,
        )
        return

    old_values = _before_save.pop(str(instance.pk), None) or {}
    changed = AuditService.changed_keys(old_values, new_values)
    if not changed:
        return
    AuditService.log(
        actor=actor,
        action=AUDIT_ACTION_UPDATE,
        model_name='User',
        object_id=instance.pk,
        old_values={key: old_values.get(key) for key in changed},
        new_values={key: new_values.get(key) for key in changed},
    )
