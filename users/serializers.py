"""
Users — Serializers

Read and write serializers for User, the access-gate query and custom
JWT token claims.

@file users/serializers.py
"""

from django.contrib.auth import authenticate
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from .models import User


# ---------------------------------------------------------------------------
# JWT: custom claims
# ---------------------------------------------------------------------------

class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """Inject username, display name and role into the JWT payload."""

    username_field = 'username'

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token['username'] = user.username
        token['name'] = user.name
        token['role'] = 'admin' if user.is_superuser else user.role
        return token

    def validate(self, attrs):
        user = authenticate(
            request=self.context.get('request'),
            username=attrs.get('username'),
            password=attrs.get('password'),
        )

        if user is None or user.is_deleted:
            raise serializers.ValidationError(
                {'detail': 'Usuario o contraseña incorrectos.'},
                code='authentication_failed',
            )

        data = super().validate(attrs)
        data['user'] = UserReadSerializer(user).data
        return data


# ---------------------------------------------------------------------------
# Auth serializers
# ---------------------------------------------------------------------------

class AccessQuerySerializer(serializers.Serializer):
    path = serializers.CharField(max_length=200)

    def validate_path(self, value):
        if not value.startswith('/'):
            raise serializers.ValidationError('La ruta debe comenzar con "/".')
        return value


# ---------------------------------------------------------------------------
# User serializers
# ---------------------------------------------------------------------------

class UserReadSerializer(serializers.ModelSerializer):
    """Read-only user representation — returned in list / detail views."""

    employee_name = serializers.CharField(
        source='employee.full_name', read_only=True, default=None,
    )

    class Meta:
        model = User
        fields = [
            'id', 'username', 'name', 'role',
            'employee', 'employee_name',
            'is_staff', 'is_active', 'date_joined', 'last_login',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class UserWriteSerializer(serializers.ModelSerializer):
    """Create / update users. Password is write-only."""

    password = serializers.CharField(write_only=True, required=False, min_length=8)

    class Meta:
        model = User
        fields = ['username', 'name', 'role', 'employee', 'is_active', 'password']

    def validate_username(self, value):
        qs = User.objects.filter(username=value)
        if self.instance:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError('El nombre de usuario ya está en uso.')
        return value
