"""
Personnel — Views

Areas and employees. Both live under the /personal section of the
access gate.

@file personnel/views.py
"""

from rest_framework import viewsets

from users.access import PERSONNEL_PATH, Principal
from users.permissions import IsActiveUser, PathAccessPermission

from .models import Area, Employee
from .serializers import AreaSerializer, EmployeeReadSerializer, EmployeeWriteSerializer
from .services import AreaService, EmployeeService


class AreaViewSet(viewsets.ModelViewSet):
    permission_classes = [IsActiveUser, PathAccessPermission]
    access_path = PERSONNEL_PATH
    serializer_class = AreaSerializer
    queryset = Area.objects.all()
    search_fields = ['name', 'description']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def perform_create(self, serializer):
        serializer.instance = AreaService.create_area(
            principal=Principal.from_user(self.request.user),
            actor=self.request.user,
            **serializer.validated_data,
        )

    def perform_update(self, serializer):
        serializer.instance = AreaService.update_area(
            area_id=self.get_object().pk,
            principal=Principal.from_user(self.request.user),
            actor=self.request.user,
            **serializer.validated_data,
        )

    def perform_destroy(self, instance):
        AreaService.delete_area(
            area_id=instance.pk,
            principal=Principal.from_user(self.request.user),
            actor=self.request.user,
        )


class EmployeeViewSet(viewsets.ModelViewSet):
    """
    Employees. Inactive employees are hidden from the list unless
    ?status=inactivo is requested; DELETE deactivates.
    """

    permission_classes = [IsActiveUser, PathAccessPermission]
    access_path = PERSONNEL_PATH
    filterset_fields = ['status', 'area', 'regime']
    search_fields = ['dni', 'full_name', 'position']
    ordering_fields = ['full_name', 'hire_date', 'created_at']
    ordering = ['full_name']

    def get_queryset(self):
        qs = Employee.objects.select_related('area')
        if self.action == 'list' and not self.request.query_params.get('status'):
            qs = qs.exclude(status=Employee.StatusChoices.INACTIVO)
        return qs

    def get_serializer_class(self):
        if self.action in ('list', 'retrieve'):
            return EmployeeReadSerializer
        return EmployeeWriteSerializer

    def perform_create(self, serializer):
        serializer.instance = EmployeeService.create_employee(
            principal=Principal.from_user(self.request.user),
            actor=self.request.user,
            **serializer.validated_data,
        )

    def perform_update(self, serializer):
        serializer.instance = EmployeeService.update_employee(
            employee_id=self.get_object().pk,
            principal=Principal.from_user(self.request.user),
            actor=self.request.user,
            **serializer.validated_data,
        )

    def perform_destroy(self, instance):
        EmployeeService.deactivate_employee(
            employee_id=instance.pk,
            principal=Principal.from_user(self.request.user),
            actor=self.request.user,
        )
