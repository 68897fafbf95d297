"""
ISP Forms — Test Settings

Used by pytest-django (see pyproject.toml). No external services: SQLite
in memory, local-memory cache, no throttling.

@file config/settings/test.py
"""

from .base import *  # noqa: F401, F403

DEBUG = False

ALLOWED_HOSTS = ['testserver', 'localhost']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []  # noqa: F405
REST_FRAMEWORK['DEFAULT_RENDERER_CLASSES'] = (  # noqa: F405
    'core.renderers.StandardJSONRenderer',
)

LOGGING['loggers']['isp_forms']['level'] = 'WARNING'  # noqa: F405
# Let pytest's caplog see project records.
LOGGING['loggers']['isp_forms']['propagate'] = True  # noqa: F405
