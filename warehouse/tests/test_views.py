"""
Warehouse — API Integration Tests

Response envelope, movement endpoints, error mapping and the access
gate on the warehouse sections.

@file warehouse/tests/test_views.py
"""

from decimal import Decimal

import pytest
from django.urls import reverse
from rest_framework import status

from tests.factories import (
    EmployeeFactory,
    MaterialCategoryFactory,
    MaterialFactory,
    StockEntryFactory,
    WarehouseFactory,
)
from warehouse.models import EppDelivery, Material, StockEntry


@pytest.fixture
def stocked(db):
    warehouse = WarehouseFactory(name='Central')
    material = MaterialFactory(name='Cable NYY', valuation=Decimal('60.00'))
    StockEntryFactory(material=material, warehouse=warehouse, quantity=Decimal('6'))
    return material, warehouse


@pytest.mark.django_db
class TestMaterialEndpoints:
    def test_list_envelope(self, authenticated_client, stocked):
        response = authenticated_client.get(reverse('api-v1:warehouse:material-list'))
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body['success'] is True
        assert body['meta']['count'] == 1
        row = body['data'][0]
        assert row['name'] == 'Cable NYY'
        assert Decimal(str(row['total_stock'])) == Decimal('6')

    def test_create_with_initial_stock(self, authenticated_client):
        category = MaterialCategoryFactory()
        warehouse = WarehouseFactory()
        response = authenticated_client.post(
            reverse('api-v1:warehouse:material-list'),
            {
                'code': 'ELE-010',
                'name': 'Foco LED',
                'category': str(category.pk),
                'unit': 'UND',
                'minimum_stock': '2',
                'initial_stock': '8',
                'warehouse': str(warehouse.pk),
            },
            format='json',
        )
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()['data']
        assert data['code'] == 'ELE-010'
        assert Decimal(str(data['total_stock'])) == Decimal('8')
        assert data['is_critical'] is False

    def test_create_duplicate_code(self, authenticated_client):
        existing = MaterialFactory(code='ELE-010')
        response = authenticated_client.post(
            reverse('api-v1:warehouse:material-list'),
            {'code': 'ELE-010', 'name': 'Otro', 'category': str(existing.category_id)},
            format='json',
        )
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()['errors']['detail'] == "El código 'ELE-010' ya está en uso."

    def test_create_valuation_without_stock(self, authenticated_client):
        category = MaterialCategoryFactory()
        response = authenticated_client.post(
            reverse('api-v1:warehouse:material-list'),
            {'code': 'ELE-011', 'name': 'Cinta', 'category': str(category.pk), 'valuation': '50.00'},
            format='json',
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['errors']['detail'] == 'Un material sin stock no puede tener valorización.'

    def test_stock_breakdown(self, authenticated_client, stocked):
        material, warehouse = stocked
        response = authenticated_client.get(
            reverse('api-v1:warehouse:material-stock', args=[material.pk]),
        )
        data = response.json()['data']
        assert Decimal(str(data['total_stock'])) == Decimal('6')
        assert data['entries'][0]['warehouse_name'] == 'Central'

    def test_delete_material(self, authenticated_client, stocked):
        material, _ = stocked
        response = authenticated_client.delete(
            reverse('api-v1:warehouse:material-detail', args=[material.pk]),
        )
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Material.objects.filter(pk=material.pk).exists()
        assert not StockEntry.objects.exists()

    def test_delete_category_in_use(self, authenticated_client, stocked):
        material, _ = stocked
        response = authenticated_client.delete(
            reverse('api-v1:warehouse:category-detail', args=[material.category_id]),
        )
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()['code'] == 'REFERENTIAL_INTEGRITY'


@pytest.mark.django_db
class TestMovementEndpoints:
    def test_receipt(self, authenticated_client, stocked):
        material, warehouse = stocked
        response = authenticated_client.post(
            reverse('api-v1:warehouse:receipt-list'),
            {
                'warehouse': str(warehouse.pk),
                'document': 'GR-0001',
                'lines': [{'material': str(material.pk), 'quantity': '4', 'unit_cost': '10.00'}],
            },
            format='json',
        )
        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()['data']
        assert data['document'] == 'GR-0001'
        assert len(data['lines']) == 1
        material.refresh_from_db()
        assert material.valuation == Decimal('100.00')

    def test_issue(self, authenticated_client, stocked):
        material, warehouse = stocked
        response = authenticated_client.post(
            reverse('api-v1:warehouse:issue-list'),
            {
                'warehouse': str(warehouse.pk),
                'requested_by': 'Mantenimiento',
                'lines': [{'material': str(material.pk), 'quantity': '3'}],
            },
            format='json',
        )
        assert response.status_code == status.HTTP_201_CREATED
        material.refresh_from_db()
        assert material.valuation == Decimal('30.00')

    def test_issue_insufficient_stock(self, authenticated_client, stocked):
        material, warehouse = stocked
        response = authenticated_client.post(
            reverse('api-v1:warehouse:issue-list'),
            {
                'warehouse': str(warehouse.pk),
                'lines': [{'material': str(material.pk), 'quantity': '10'}],
            },
            format='json',
        )
        assert response.status_code == status.HTTP_409_CONFLICT
        body = response.json()
        assert body['success'] is False
        assert body['code'] == 'INSUFFICIENT_STOCK'
        assert body['errors']['detail'] == 'Stock insuficiente para "Cable NYY". Disponible: 6'

    def test_issue_unknown_warehouse(self, authenticated_client, stocked):
        material, _ = stocked
        response = authenticated_client.post(
            reverse('api-v1:warehouse:issue-list'),
            {
                'warehouse': '00000000-0000-0000-0000-000000000000',
                'lines': [{'material': str(material.pk), 'quantity': '1'}],
            },
            format='json',
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_movements_are_insert_only(self, authenticated_client):
        url = reverse('api-v1:warehouse:receipt-list')
        assert authenticated_client.put(url, {}, format='json').status_code == status.HTTP_405_METHOD_NOT_ALLOWED

    def test_epp_delivery_and_delete(self, authenticated_client, stocked):
        material, warehouse = stocked
        employee = EmployeeFactory()
        response = authenticated_client.post(
            reverse('api-v1:warehouse:epp-delivery-list'),
            {
                'employee': str(employee.pk),
                'warehouse': str(warehouse.pk),
                'signed': True,
                'lines': [{'material': str(material.pk), 'quantity': '2', 'size': 'L'}],
            },
            format='json',
        )
        assert response.status_code == status.HTTP_201_CREATED
        delivery_id = response.json()['data']['id']
        assert StockEntry.objects.get(material=material).quantity == Decimal('4.00')

        response = authenticated_client.delete(
            reverse('api-v1:warehouse:epp-delivery-detail', args=[delivery_id]),
        )
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not EppDelivery.objects.exists()
        assert StockEntry.objects.get(material=material).quantity == Decimal('4.00')


@pytest.mark.django_db
class TestAccessGate:
    def test_manager_reads_warehouse(self, client_for_role, stocked):
        response = client_for_role('gerente').get(reverse('api-v1:warehouse:material-list'))
        assert response.status_code == status.HTTP_200_OK

    def test_manager_cannot_issue(self, client_for_role, stocked):
        material, warehouse = stocked
        response = client_for_role('gerente').post(
            reverse('api-v1:warehouse:issue-list'),
            {
                'warehouse': str(warehouse.pk),
                'lines': [{'material': str(material.pk), 'quantity': '1'}],
            },
            format='json',
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert StockEntry.objects.get(material=material).quantity == Decimal('6.00')

    def test_driver_has_no_access(self, client_for_role):
        response = client_for_role('conductor').get(reverse('api-v1:warehouse:material-list'))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_warehouse_keeper_delivers_epp(self, client_for_role, stocked):
        material, warehouse = stocked
        response = client_for_role('almacenero').post(
            reverse('api-v1:warehouse:epp-delivery-list'),
            {
                'employee': str(EmployeeFactory().pk),
                'warehouse': str(warehouse.pk),
                'lines': [{'material': str(material.pk), 'quantity': '1'}],
            },
            format='json',
        )
        assert response.status_code == status.HTTP_201_CREATED

    def test_unauthenticated(self, api_client):
        response = api_client.get(reverse('api-v1:warehouse:material-list'))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestReportEndpoints:
    def test_summary(self, authenticated_client, stocked):
        response = authenticated_client.get(reverse('api-v1:warehouse:report-summary'))
        assert response.status_code == status.HTTP_200_OK
        data = response.json()['data']
        assert data['materials'] == 1
        assert Decimal(str(data['total_valuation'])) == Decimal('60.00')

    def test_inventory_export(self, authenticated_client, stocked):
        response = authenticated_client.get(reverse('api-v1:warehouse:report-inventory-xlsx'))
        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'] == (
            'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        )
        assert 'Reporte_Inventario_' in response['Content-Disposition']
        assert response.content[:2] == b'PK'
