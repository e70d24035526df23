"""
Users — Views

Auth endpoints (login, refresh, logout, me, access) and the user
management CRUD ViewSet.

@file users/views.py
"""

import logging

from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenRefreshView

from core.constants import AUDIT_ACTION_LOGIN, AUDIT_ACTION_LOGIN_FAILED, AUDIT_ACTION_LOGOUT

from .access import USERS_PATH, Principal, can_edit, has_access
from .models import User
from .permissions import IsActiveUser, PathAccessPermission
from .serializers import (
    AccessQuerySerializer,
    CustomTokenObtainPairSerializer,
    UserReadSerializer,
    UserWriteSerializer,
)
from .services import AuthService, UserService

logger = logging.getLogger('mineops')


# ---------------------------------------------------------------------------
# Auth views
# ---------------------------------------------------------------------------

class LoginView(APIView):
    """POST /api/v1/auth/login — Authenticate and obtain JWT pair."""
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_scope = 'login'

    def post(self, request):
        serializer = CustomTokenObtainPairSerializer(
            data=request.data, context={'request': request},
        )
        if not serializer.is_valid():
            logger.warning('Failed login for %s', request.data.get('username'))
            AuthService.log_auth_event(
                request,
                action=AUDIT_ACTION_LOGIN_FAILED,
                attempted_username=str(request.data.get('username', ''))[:150],
            )
            return Response(
                {
                    'success': False,
                    'errors': {'detail': ['Usuario o contraseña incorrectos.']},
                    'code': 'AUTHENTICATION_FAILED',
                },
                status=status.HTTP_401_UNAUTHORIZED,
            )

        user_obj = User.objects.get(username=serializer.validated_data['user']['username'])
        AuthService.log_auth_event(request, action=AUDIT_ACTION_LOGIN, user=user_obj)

        return Response({
            'success': True,
            'data': {
                'access': serializer.validated_data['access'],
                'refresh': serializer.validated_data['refresh'],
                'user': serializer.validated_data['user'],
            },
        })


class LogoutView(APIView):
    """POST /api/v1/auth/logout — Blacklist the refresh token."""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        refresh_token = request.data.get('refresh')
        if refresh_token:
            try:
                RefreshToken(refresh_token).blacklist()
            except TokenError:
                logger.info('Logout with an invalid or already blacklisted refresh token')

        AuthService.log_auth_event(request, action=AUDIT_ACTION_LOGOUT, user=request.user)

        return Response({'success': True, 'data': None}, status=status.HTTP_200_OK)


class TokenRefreshAPIView(TokenRefreshView):
    """POST /api/v1/auth/refresh — Rotate refresh token."""
    pass


class MeView(APIView):
    """GET /api/v1/auth/me — Return the current authenticated user."""
    permission_classes = [IsActiveUser]

    def get(self, request):
        return Response({
            'success': True,
            'data': UserReadSerializer(request.user).data,
        })


class AccessView(APIView):
    """
    GET /api/v1/auth/access/?path=/almacen

    Evaluates the access gate for the current user so the client can hide
    sections and edit controls.
    """
    permission_classes = [IsActiveUser]

    def get(self, request):
        serializer = AccessQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        path = serializer.validated_data['path']
        principal = Principal.from_user(request.user)
        return Response({
            'success': True,
            'data': {
                'path': path,
                'role': principal.role,
                'has_access': has_access(principal.role, path),
                'can_edit': can_edit(principal.role, path),
            },
        })


# ---------------------------------------------------------------------------
# User management ViewSet
# ---------------------------------------------------------------------------

class UserViewSet(viewsets.ModelViewSet):
    """
    CRUD for user accounts under /configuracion/usuarios. Managers can
    not even list accounts; only admins change them.
    """

    permission_classes = [IsActiveUser, PathAccessPermission]
    access_path = USERS_PATH
    filterset_fields = ['role', 'is_active', 'employee']
    search_fields = ['username', 'name']
    ordering_fields = ['username', 'name', 'role', 'created_at']
    ordering = ['username']

    def get_queryset(self):
        return (
            User.objects
            .filter(is_deleted=False)
            .select_related('employee')
        )

    def get_serializer_class(self):
        if self.action in ('list', 'retrieve'):
            return UserReadSerializer
        return UserWriteSerializer

    def create(self, request, *args, **kwargs):
        serializer = UserWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        user = UserService.create_user(
            username=data.pop('username'),
            password=data.pop('password', None),
            principal=Principal.from_user(request.user),
            actor=request.user,
            **data,
        )
        return Response(UserReadSerializer(user).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = UserWriteSerializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        user = UserService.update_user(
            user_id=instance.pk,
            password=data.pop('password', None),
            principal=Principal.from_user(request.user),
            actor=request.user,
            **data,
        )
        return Response(UserReadSerializer(user).data)

    def perform_destroy(self, instance):
        UserService.delete_user(
            user_id=instance.pk,
            principal=Principal.from_user(self.request.user),
            actor=self.request.user,
        )
