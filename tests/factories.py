"""
MineOps — Test Factories

Factory Boy factories for generating test data. Used across all test
modules.

@file tests/factories.py
"""

from decimal import Decimal

import factory

from core.models import AuditLog
from personnel.models import Area, Employee
from users.models import User
from warehouse.models import (
    Material,
    MaterialCategory,
    StockEntry,
    Supplier,
    Warehouse,
)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f'user{n}')
    name = factory.Faker('name')
    role = User.RoleChoices.ADMIN
    is_active = True

    @factory.post_generation
    def password(self, create, extracted, **kwargs):
        password = extracted or 'TestPass2026!'
        self.set_password(password)
        if create:
            self.save(update_fields=['password'])


class SuperuserFactory(UserFactory):
    is_staff = True
    is_superuser = True


# ---------------------------------------------------------------------------
# Personnel
# ---------------------------------------------------------------------------

class AreaFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Area

    name = factory.Sequence(lambda n: f'Area-{n}')
    description = factory.Faker('sentence')


class EmployeeFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Employee

    dni = factory.Sequence(lambda n: f'{40000000 + n}')
    full_name = factory.Faker('name')
    position = 'Operador'
    area = factory.SubFactory(AreaFactory)
    status = Employee.StatusChoices.ACTIVO


# ---------------------------------------------------------------------------
# Warehouse catalogue
# ---------------------------------------------------------------------------

class WarehouseFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Warehouse

    name = factory.Sequence(lambda n: f'Almacen-{n}')
    location = 'Campamento'


class MaterialCategoryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = MaterialCategory

    name = factory.Sequence(lambda n: f'Category-{n}')


class SupplierFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Supplier

    name = factory.Faker('company')
    ruc = factory.Sequence(lambda n: f'20{n:09d}')
    supplier_type = 'Materiales'


class MaterialFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Material

    code = factory.Sequence(lambda n: f'MAT-{n:04d}')
    name = factory.Sequence(lambda n: f'Material-{n}')
    category = factory.SubFactory(MaterialCategoryFactory)
    area = factory.SubFactory(AreaFactory)
    unit = 'UND'
    minimum_stock = Decimal('0.00')
    valuation = Decimal('0.00')


class StockEntryFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = StockEntry

    material = factory.SubFactory(MaterialFactory)
    warehouse = factory.SubFactory(WarehouseFactory)
    quantity = Decimal('0.00')


# ---------------------------------------------------------------------------
# Audit
# ---------------------------------------------------------------------------

class AuditLogFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = AuditLog

    actor = factory.SubFactory(UserFactory)
    action = AuditLog.ActionChoices.CREATE
    model_name = 'Material'
    object_id = factory.Faker('uuid4')
