"""
Test settings: short timeouts, isolated cache.
"""
from .base import *

DEBUG = False

ALLOWED_HOSTS = ['testserver', 'localhost']

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'environmental-quality-tests',
    }
}

ENVIRONMENT_QUALITY_SETTINGS = {
    **ENVIRONMENT_QUALITY_SETTINGS,
    'REQUEST_TIMEOUT': 2,
    'REFRESH_TIMEOUT': 5,
}

LOGGING['loggers']['apps']['level'] = 'DEBUG'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}
