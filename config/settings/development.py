"""
MineOps — Development Settings

Local development overrides. Activated by:
  DJANGO_SETTINGS_MODULE=config.settings.development

Without REDIS_URL the inventory summary is cached in process memory.

@file config/settings/development.py
"""

from .base import *  # noqa: F401, F403

DEBUG = True

ALLOWED_HOSTS = ['*']

INSTALLED_APPS += [  # noqa: F405
    'django_extensions',
]

if not env('REDIS_URL', default=''):  # noqa: F405
    CACHES = {
        'default': {
            'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
            'LOCATION': 'mineops-dev',
        },
    }

REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'].update({  # noqa: F405
    'anon': '1000/minute',
    'user': '5000/minute',
    'login': '100/minute',
})

INVENTORY_SUMMARY_CACHE_SECONDS = 30

LOGGING['loggers']['mineops']['level'] = 'DEBUG'  # noqa: F405
