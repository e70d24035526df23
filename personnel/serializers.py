"""
Personnel — Serializers

@file personnel/serializers.py
"""

from rest_framework import serializers

from .models import Area, Employee


class AreaSerializer(serializers.ModelSerializer):
    class Meta:
        model = Area
        fields = ['id', 'name', 'description', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {'name': {'validators': []}}


class EmployeeReadSerializer(serializers.ModelSerializer):
    area_name = serializers.CharField(source='area.name', read_only=True, default=None)

    class Meta:
        model = Employee
        fields = [
            'id', 'dni', 'full_name', 'position', 'area', 'area_name',
            'regime', 'hire_date', 'status', 'phone', 'notes',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class EmployeeWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Employee
        fields = [
            'dni', 'full_name', 'position', 'area', 'regime',
            'hire_date', 'status', 'phone', 'notes',
        ]
        extra_kwargs = {'dni': {'validators': []}}
