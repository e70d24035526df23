"""
Personnel — Service Tests

@file personnel/tests/test_services.py
"""

import pytest

from core.exceptions import (
    AccessDeniedError,
    DuplicateResourceError,
    ReferentialIntegrityError,
)
from core.models import AuditLog
from personnel.models import Area, Employee
from personnel.services import AreaService, EmployeeService
from tests.factories import AreaFactory, EmployeeFactory, MaterialFactory, UserFactory
from users.access import Principal


@pytest.mark.django_db
class TestAreaService:
    def test_create_area(self):
        actor = UserFactory()
        area = AreaService.create_area(name='Mina', description='Interior mina', actor=actor)
        assert area.created_by == actor
        assert AuditLog.objects.filter(model_name='Area', action='CREATE').exists()

    def test_duplicate_name_is_case_insensitive(self):
        AreaFactory(name='Planta')
        with pytest.raises(DuplicateResourceError):
            AreaService.create_area(name='planta')

    def test_rename(self):
        area = AreaFactory(name='Taller')
        AreaService.update_area(area_id=area.pk, name='Taller Mecánico')
        area.refresh_from_db()
        assert area.name == 'Taller Mecánico'

    def test_delete_unused_area(self):
        area = AreaFactory()
        AreaService.delete_area(area_id=area.pk)
        assert not Area.objects.filter(pk=area.pk).exists()

    def test_delete_area_with_materials(self):
        material = MaterialFactory()
        with pytest.raises(ReferentialIntegrityError):
            AreaService.delete_area(area_id=material.area_id)
        assert Area.objects.filter(pk=material.area_id).exists()

    def test_warehouse_keeper_cannot_create(self):
        with pytest.raises(AccessDeniedError):
            AreaService.create_area(name='Mina', principal=Principal(role='almacenero'))


@pytest.mark.django_db
class TestEmployeeService:
    def test_create_employee(self):
        area = AreaFactory()
        employee = EmployeeService.create_employee(
            dni='45678912', full_name='Rosa Mamani', area=area, position='Perforista',
        )
        assert employee.is_active is True
        assert employee.area == area

    def test_duplicate_dni(self):
        EmployeeFactory(dni='45678912')
        with pytest.raises(DuplicateResourceError) as excinfo:
            EmployeeService.create_employee(dni='45678912', full_name='Otro')
        assert '45678912' in str(excinfo.value.detail)

    def test_deactivate(self):
        employee = EmployeeFactory()
        EmployeeService.deactivate_employee(employee_id=employee.pk)
        employee.refresh_from_db()
        assert employee.status == Employee.StatusChoices.INACTIVO
        assert employee not in EmployeeService.active()

    def test_vacation_counts_as_active(self):
        employee = EmployeeFactory(status=Employee.StatusChoices.VACACIONES)
        assert employee in EmployeeService.active()

    def test_manager_cannot_update(self):
        employee = EmployeeFactory()
        with pytest.raises(AccessDeniedError):
            EmployeeService.update_employee(
                employee_id=employee.pk, full_name='x', principal=Principal(role='gerente'),
            )
