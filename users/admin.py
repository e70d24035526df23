"""
Users — Django Admin Configuration

Admin panel for User accounts with role badges. Soft-deleted users are
excluded unless explicitly filtered for.

@file users/admin.py
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = (
        'username', 'name', 'role_badge', 'employee',
        'is_active', 'is_staff', 'last_login',
    )
    list_filter = ('role', 'is_active', 'is_staff', 'is_superuser', 'is_deleted')
    search_fields = ('username', 'name', 'employee__full_name')
    readonly_fields = (
        'id', 'created_at', 'updated_at', 'created_by', 'updated_by',
        'date_joined', 'last_login',
    )
    raw_id_fields = ('employee',)
    list_select_related = ('employee',)
    list_per_page = 30
    ordering = ('username',)

    fieldsets = (
        (None, {
            'fields': ('id', 'username', 'password'),
        }),
        (_('Profile'), {
            'fields': ('name', 'role', 'employee'),
        }),
        (_('Permissions'), {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        (_('Audit'), {
            'fields': ('date_joined', 'last_login', 'created_at', 'updated_at', 'created_by', 'updated_by'),
            'classes': ('collapse',),
        }),
        (_('Soft Delete'), {
            'fields': ('is_deleted', 'deleted_at', 'deleted_by'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('username', 'name', 'role', 'password1', 'password2'),
        }),
    )

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        if not request.GET.get('is_deleted__exact'):
            qs = qs.filter(is_deleted=False)
        return qs

    @admin.display(description=_('Role'))
    def role_badge(self, obj):
        colors = {
            'admin': '#ef4444',
            'gerente': '#8b5cf6',
            'gerencia': '#8b5cf6',
            'logistica': '#3b82f6',
            'almacenero': '#22c55e',
            'conductor': '#eab308',
            'asistente_administrativo': '#06b6d4',
        }
        color = colors.get(obj.role, '#6b7280')
        return format_html(
            '<span style="background:{}; color:#fff; padding:2px 8px; '
            'border-radius:4px; font-size:11px; font-weight:600;">{}</span>',
            color, obj.get_role_display(),
        )
