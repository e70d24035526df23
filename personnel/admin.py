"""
Personnel — Django Admin Configuration

@file personnel/admin.py
"""

from django.contrib import admin

from .models import Area, Employee


@admin.register(Area)
class AreaAdmin(admin.ModelAdmin):
    list_display = ('name', 'description', 'created_at')
    search_fields = ('name',)
    readonly_fields = ('id', 'created_at', 'updated_at', 'created_by', 'updated_by')


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'dni', 'position', 'area', 'regime', 'status', 'hire_date')
    list_filter = ('status', 'area', 'regime')
    search_fields = ('full_name', 'dni', 'position')
    readonly_fields = ('id', 'created_at', 'updated_at', 'created_by', 'updated_by')
    list_select_related = ('area',)
    list_per_page = 50
