"""
Core — Django Admin Configuration

Shared read-only mixin and the audit trail viewer. Stock movements and
audit rows are written by the service layer only, so the panel never
adds, edits or deletes them.

@file core/admin.py
"""

from django.contrib import admin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from core.models import AuditLog
from core.services import AuditService

ACTION_COLORS = {
    AuditLog.ActionChoices.CREATE: '#16a34a',
    AuditLog.ActionChoices.UPDATE: '#2563eb',
    AuditLog.ActionChoices.DELETE: '#dc2626',
    AuditLog.ActionChoices.SOFT_DELETE: '#ea580c',
    AuditLog.ActionChoices.LOGIN: '#0891b2',
    AuditLog.ActionChoices.LOGOUT: '#64748b',
    AuditLog.ActionChoices.LOGIN_FAILED: '#b91c1c',
}


class ReadOnlyAdminMixin:
    """Rows visible in the panel, writable only through the services."""

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(AuditLog)
class AuditLogAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = (
        'timestamp', 'action_badge', 'model_name', 'object_id',
        'changed_fields', 'actor', 'ip_address',
    )
    list_filter = ('action', 'model_name')
    search_fields = ('object_id', 'actor__username', 'actor__name')
    readonly_fields = (
        'id', 'actor', 'action', 'model_name', 'object_id',
        'old_values', 'new_values', 'ip_address', 'user_agent', 'timestamp',
    )
    date_hierarchy = 'timestamp'
    list_select_related = ('actor',)
    show_full_result_count = False
    list_per_page = 50

    fieldsets = (
        (None, {
            'fields': ('id', 'action', 'timestamp', 'actor'),
        }),
        (_('Target'), {
            'fields': ('model_name', 'object_id'),
        }),
        (_('Values'), {
            'fields': ('old_values', 'new_values'),
            'classes': ('collapse',),
        }),
        (_('Client'), {
            'fields': ('ip_address', 'user_agent'),
            'classes': ('collapse',),
        }),
    )

    @admin.display(description=_('Action'))
    def action_badge(self, obj):
        return format_html(
            '<span style="background:{}; color:#fff; padding:2px 6px; border-radius:3px;">{}</span>',
            ACTION_COLORS.get(obj.action, '#64748b'), obj.get_action_display(),
        )

    @admin.display(description=_('Changed'))
    def changed_fields(self, obj):
        if not obj.old_values or not obj.new_values:
            return '-'
        return ', '.join(AuditService.changed_keys(obj.old_values, obj.new_values)) or '-'
