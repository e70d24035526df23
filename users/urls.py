"""
Users — Auth URL Configuration

Endpoints: login, refresh, logout, me, access.

@file users/urls.py
"""

from django.urls import path

from .views import (
    AccessView,
    LoginView,
    LogoutView,
    MeView,
    TokenRefreshAPIView,
)

app_name = 'auth'

urlpatterns = [
    path('login/', LoginView.as_view(), name='login'),
    path('refresh/', TokenRefreshAPIView.as_view(), name='token-refresh'),
    path('logout/', LogoutView.as_view(), name='logout'),
    path('me/', MeView.as_view(), name='me'),
    path('access/', AccessView.as_view(), name='access'),
]
