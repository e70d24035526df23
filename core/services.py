"""
Core — Audit Service

One entry point for the audit trail. Services and signals call
AuditService.log; views that have a request at hand use log_request so
the client address and agent are recorded too.

Snapshots are plain JSON: Decimals keep their two decimals as strings,
UUIDs and dates become strings, foreign keys are stored as the target pk.

@file core/services.py
"""

import logging
from decimal import Decimal
from typing import Any

from django.forms.models import model_to_dict

from core.models import AuditLog

logger = logging.getLogger('mineops')


def _json_safe(value):
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Decimal):
        return str(value)
    if hasattr(value, 'isoformat'):
        return value.isoformat()
    if isinstance(value, (list, tuple, set)):
        return [str(item.pk) if hasattr(item, 'pk') else _json_safe(item) for item in value]
    return str(value)


class AuditService:
    """Writes AuditLog rows and builds the old/new value snapshots."""

    @staticmethod
    def log(
        *,
        actor,
        action: str,
        model_name: str,
        object_id,
        old_values: dict[str, Any] | None = None,
        new_values: dict[str, Any] | None = None,
        ip_address: str | None = None,
        user_agent: str = '',
    ) -> AuditLog:
        # Unsaved or anonymous users are recorded as "no actor".
        if actor is not None and not getattr(actor, 'pk', None):
            actor = None
        entry = AuditLog.objects.create(
            actor=actor,
            action=action,
            model_name=model_name,
            object_id=str(object_id),
            old_values=old_values,
            new_values=new_values,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        logger.debug('Audit %s %s:%s', action, model_name, object_id)
        return entry

    @staticmethod
    def log_request(request, *, action: str, model_name: str, object_id, actor=None, **values) -> AuditLog:
        """Same as log(), taking the client address and agent from `request`."""
        return AuditService.log(
            actor=actor,
            action=action,
            model_name=model_name,
            object_id=object_id,
            ip_address=AuditService.get_client_ip(request),
            user_agent=request.META.get('HTTP_USER_AGENT', ''),
            **values,
        )

    @staticmethod
    def snapshot(instance, fields=None, exclude=None) -> dict[str, Any]:
        data = model_to_dict(instance, fields=fields, exclude=exclude)
        return {key: _json_safe(value) for key, value in data.items()}

    @staticmethod
    def changed_keys(old_values: dict | None, new_values: dict | None) -> list[str]:
        """Keys whose value differs between two snapshots, sorted."""
        old_values = old_values or {}
        new_values = new_values or {}
        keys = set(old_values) | set(new_values)
        return sorted(key for key in keys if old_values.get(key) != new_values.get(key))

    @staticmethod
    def get_client_ip(request) -> str | None:
        x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
        if x_forwarded_for:
            return x_forwarded_for.split(',')[0].strip()
        return request.META.get('REMOTE_ADDR')
