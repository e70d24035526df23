"""
Users — Application Configuration

Connects the account audit signals.
"""

from django.apps import AppConfig


class UsersConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'users'
    verbose_name = 'Usuarios y accesos'

    def ready(self):
        import users.signals  # noqa: F401
