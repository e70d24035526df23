"""
Personnel — Service Layer

Area and employee maintenance. Areas referenced by materials, employees
or stock issues cannot be deleted; employees are only ever deactivated.

@file personnel/services.py
"""

import logging

from django.db import transaction
from django.db.models.deletion import ProtectedError

from core.constants import (
    AUDIT_ACTION_CREATE,
    AUDIT_ACTION_DELETE,
    AUDIT_ACTION_SOFT_DELETE,
    AUDIT_ACTION_UPDATE,
)
from core.exceptions import (
    DuplicateResourceError,
    ReferentialIntegrityError,
    ResourceNotFoundError,
)
from core.services import AuditService
from users.access import PERSONNEL_PATH, Principal, require_edit
from warehouse.reports import invalidate_inventory_summary

from .models import Area, Employee

logger = logging.getLogger('mineops')


# ---------------------------------------------------------------------------
# Areas
# ---------------------------------------------------------------------------

class AreaService:

    @staticmethod
    def get(area_id) -> Area:
        try:
            return Area.objects.get(pk=area_id)
        except Area.DoesNotExist:
            raise ResourceNotFoundError(detail=f'Área {area_id} no encontrada.')

    @staticmethod
    @transaction.atomic
    def create_area(*, name: str, description: str = '', principal: Principal | None = None, actor=None) -> Area:
        require_edit(principal, PERSONNEL_PATH)
        if Area.objects.filter(name__iexact=name).exists():
            raise DuplicateResourceError(detail=f"El área '{name}' ya existe.")

        area = Area.objects.create(name=name, description=description, created_by=actor)
        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_CREATE,
            model_name='Area',
            object_id=str(area.pk),
            new_values=AuditService.snapshot(area),
        )
        transaction.on_commit(invalidate_inventory_summary)
        return area

    @staticmethod
    @transaction.atomic
    def update_area(*, area_id, principal: Principal | None = None, actor=None, **fields) -> Area:
        require_edit(principal, PERSONNEL_PATH)
        area = AreaService.get(area_id)
        old_values = AuditService.snapshot(area)

        name = fields.get('name')
        if name and Area.objects.filter(name__iexact=name).exclude(pk=area.pk).exists():
            raise DuplicateResourceError(detail=f"El área '{name}' ya existe.")

        for attr, value in fields.items():
            setattr(area, attr, value)
        area.updated_by = actor
        area.save()

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_UPDATE,
            model_name='Area',
            object_id=str(area.pk),
            old_values=old_values,
            new_values=AuditService.snapshot(area),
        )
        transaction.on_commit(invalidate_inventory_summary)
        return area

    @staticmethod
    @transaction.atomic
    def delete_area(*, area_id, principal: Principal | None = None, actor=None) -> None:
        require_edit(principal, PERSONNEL_PATH)
        area = AreaService.get(area_id)
        old_values = AuditService.snapshot(area)
        try:
            area.delete()
        except ProtectedError:
            raise ReferentialIntegrityError(
                detail='No se puede eliminar el área: tiene materiales, empleados o salidas vinculadas.',
            )

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_DELETE,
            model_name='Area',
            object_id=str(area_id),
            old_values=old_values,
        )
        transaction.on_commit(invalidate_inventory_summary)
        logger.info('Area %s deleted', old_values['name'])


# ---------------------------------------------------------------------------
# Employees
# ---------------------------------------------------------------------------

class EmployeeService:

    @staticmethod
    def get(employee_id) -> Employee:
        try:
            return Employee.objects.select_related('area').get(pk=employee_id)
        except Employee.DoesNotExist:
            raise ResourceNotFoundError(detail=f'Empleado {employee_id} no encontrado.')

    @staticmethod
    def active():
        return Employee.objects.exclude(status=Employee.StatusChoices.INACTIVO)

    @staticmethod
    @transaction.atomic
    def create_employee(*, dni: str, full_name: str, principal: Principal | None = None, actor=None, **fields) -> Employee:
        require_edit(principal, PERSONNEL_PATH)
        if Employee.objects.filter(dni=dni).exists():
            raise DuplicateResourceError(detail=f"El DNI '{dni}' ya está registrado.")

        employee = Employee.objects.create(dni=dni, full_name=full_name, created_by=actor, **fields)
        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_CREATE,
            model_name='Employee',
            object_id=str(employee.pk),
            new_values=AuditService.snapshot(employee),
        )
        return employee

    @staticmethod
    @transaction.atomic
    def update_employee(*, employee_id, principal: Principal | None = None, actor=None, **fields) -> Employee:
        require_edit(principal, PERSONNEL_PATH)
        employee = EmployeeService.get(employee_id)
        old_values = AuditService.snapshot(employee)

        dni = fields.get('dni')
        if dni and Employee.objects.filter(dni=dni).exclude(pk=employee.pk).exists():
            raise DuplicateResourceError(detail=f"El DNI '{dni}' ya está registrado.")

        for attr, value in fields.items():
            setattr(employee, attr, value)
        employee.updated_by = actor
        employee.save()

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_UPDATE,
            model_name='Employee',
            object_id=str(employee.pk),
            old_values=old_values,
            new_values=AuditService.snapshot(employee),
        )
        return employee

    @staticmethod
    @transaction.atomic
    def deactivate_employee(*, employee_id, principal: Principal | None = None, actor=None) -> Employee:
        """Soft delete. EPP history and linked accounts keep pointing at the row."""
        require_edit(principal, PERSONNEL_PATH)
        employee = EmployeeService.get(employee_id)
        employee.status = Employee.StatusChoices.INACTIVO
        employee.updated_by = actor
        employee.save(update_fields=['status', 'updated_by', 'updated_at'])

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_SOFT_DELETE,
            model_name='Employee',
            object_id=str(employee.pk),
        )
        logger.info('Employee %s deactivated', employee.dni)
        return employee
