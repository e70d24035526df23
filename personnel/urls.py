"""
Personnel — URL Configuration

@file personnel/urls.py
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import AreaViewSet, EmployeeViewSet

app_name = 'personnel'

router = DefaultRouter()
router.register('areas', AreaViewSet, basename='area')
router.register('employees', EmployeeViewSet, basename='employee')

urlpatterns = [
    path('', include(router.urls)),
]
