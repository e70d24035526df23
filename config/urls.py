"""
MineOps — Root URL Configuration

All API endpoints are namespaced under /api/v1/.
The DRF browsable API is available for route inspection in development.

@file config/urls.py
"""

from django.contrib import admin
from django.urls import include, path
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.reverse import reverse

admin.site.site_header = 'MineOps Administración'
admin.site.site_title = 'MineOps'
admin.site.index_title = 'Administración de operaciones mineras'


@api_view(['GET'])
@permission_classes([AllowAny])
def api_root(request, format=None):
    """MineOps API v1 — endpoint directory."""
    return Response({
        'auth': {
            'login': reverse('api-v1:auth:login', request=request, format=format),
            'refresh': reverse('api-v1:auth:token-refresh', request=request, format=format),
            'logout': reverse('api-v1:auth:logout', request=request, format=format),
            'me': reverse('api-v1:auth:me', request=request, format=format),
            'access': reverse('api-v1:auth:access', request=request, format=format),
        },
        'users': reverse('api-v1:users:user-list', request=request, format=format),
        'personnel': {
            'areas': reverse('api-v1:personnel:area-list', request=request, format=format),
            'employees': reverse('api-v1:personnel:employee-list', request=request, format=format),
        },
        'warehouse': {
            'warehouses': reverse('api-v1:warehouse:warehouse-list', request=request, format=format),
            'categories': reverse('api-v1:warehouse:category-list', request=request, format=format),
            'materials': reverse('api-v1:warehouse:material-list', request=request, format=format),
            'suppliers': reverse('api-v1:warehouse:supplier-list', request=request, format=format),
            'stock': reverse('api-v1:warehouse:stock-entry-list', request=request, format=format),
            'receipts': reverse('api-v1:warehouse:receipt-list', request=request, format=format),
            'issues': reverse('api-v1:warehouse:issue-list', request=request, format=format),
            'epp_deliveries': reverse('api-v1:warehouse:epp-delivery-list', request=request, format=format),
            'summary': reverse('api-v1:warehouse:report-summary', request=request, format=format),
            'inventory_xlsx': reverse('api-v1:warehouse:report-inventory-xlsx', request=request, format=format),
        },
    })


api_v1_patterns = [
    path('', api_root, name='api-root'),
    path('auth/', include('users.urls', namespace='auth')),
    path('users/', include('users.urls_users', namespace='users')),
    path('personnel/', include('personnel.urls', namespace='personnel')),
    path('warehouse/', include('warehouse.urls', namespace='warehouse')),
]

urlpatterns = [
    path('admin/', admin.site.urls),

    # DRF session auth (powers the "Log in" button on the browsable API)
    path('api/auth/', include('rest_framework.urls', namespace='rest_framework')),

    # Versioned API
    path('api/v1/', include((api_v1_patterns, 'api-v1'))),
]
