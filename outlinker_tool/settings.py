"""
Django settings for the outlinker_tool.

The project hosts a single stateless JSON API (the ``outlinker`` app), so
there is no database, no session or auth stack and no static files. Search
and generation credentials are read from the environment.

Please consult the Django documentation for additional configuration
options: https://docs.djangoproject.com/en/4.2/ref/settings/
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from django.core.exceptions import ImproperlyConfigured

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv('DJANGO_SECRET_KEY', 'django-insecure-change-me')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.getenv('DJANGO_DEBUG', 'false').lower() == 'true'

RUNNING_TESTS = os.getenv('PYTEST_CURRENT_TEST') is not None or 'pytest' in sys.modules
if RUNNING_TESTS:
    DEBUG = True

if not DEBUG and SECRET_KEY == 'django-insecure-change-me' and not RUNNING_TESTS:
    raise ImproperlyConfigured('DJANGO_SECRET_KEY must be set when DEBUG is False.')

ALLOWED_HOSTS: list[str] = [
    host.strip()
    for host in os.getenv('DJANGO_ALLOWED_HOSTS', '127.0.0.1,localhost,testserver').split(',')
    if host.strip()
]

# Application definition
INSTALLED_APPS = [
    'outlinker',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
    'outlinker.middleware.sliding_window_rate_throttle',
]

ROOT_URLCONF = 'outlinker_tool.urls'

TEMPLATES: list[dict[str, object]] = []

WSGI_APPLICATION = 'outlinker_tool.wsgi.application'

DATABASES: dict[str, dict[str, object]] = {}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'outlinker',
    }
}

# Internationalization
# https://docs.djangoproject.com/en/4.2/topics/i18n/

LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = False

USE_TZ = True

# Limit raw request bodies; article HTML can be long but not unbounded.
DATA_UPLOAD_MAX_MEMORY_SIZE = int(os.getenv('DJANGO_DATA_UPLOAD_MAX_MEMORY_SIZE', str(2 * 1024 * 1024)))


# Search and generation providers
GEMINI_API_KEY = os.getenv('GEMINI_API_KEY', '')
GEMINI_MODEL = os.getenv('GEMINI_MODEL', '')
GEMINI_BASE_URL = os.getenv('GEMINI_BASE_URL', '')

GOOGLE_SEARCH_API_KEY = os.getenv('GOOGLE_SEARCH_API_KEY', '')
GOOGLE_SEARCH_ENGINE_ID = os.getenv('GOOGLE_SEARCH_ENGINE_ID', '')
GOOGLE_SEARCH_ENABLED = os.getenv('GOOGLE_SEARCH_ENABLED', 'false').lower() == 'true'

OUTLINKER_ENGINE_CONFIG = os.getenv('OUTLINKER_ENGINE_CONFIG') or None
OUTLINKER_HTTP_TIMEOUT = float(os.getenv('OUTLINKER_HTTP_TIMEOUT', '15'))
OUTLINKER_GENERATION_TIMEOUT = float(os.getenv('OUTLINKER_GENERATION_TIMEOUT', '60'))


# Security headers
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = 'DENY'
SECURE_REFERRER_POLICY = 'strict-origin-when-cross-origin'
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
USE_X_FORWARDED_HOST = True

if not DEBUG:
    SECURE_SSL_REDIRECT = os.getenv('DJANGO_SECURE_SSL_REDIRECT', 'true').lower() == 'true'
    SECURE_HSTS_SECONDS = int(os.getenv('DJANGO_SECURE_HSTS_SECONDS', '31536000'))
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_PRELOAD = True
else:
    SECURE_SSL_REDIRECT = False

# Rate limiting / throttling defaults (per IP per route)
THROTTLED_ROUTES = [
    'outlinker:external_links',
    'outlinker:internal_links',
    'outlinker:website_context',
]
THROTTLE_LIMIT = int(os.getenv('OUTLINKER_THROTTLE_LIMIT', '30'))
THROTTLE_WINDOW = int(os.getenv('OUTLINKER_THROTTLE_WINDOW', '60'))
THROTTLE_ROUTE_LIMITS = {
    # one request fans out to up to twenty generations
    'outlinker:website_context': int(os.getenv('OUTLINKER_CONTEXT_THROTTLE_LIMIT', '5')),
}
THROTTLE_IP_HEADER = os.getenv('OUTLINKER_THROTTLE_HEADER', 'HTTP_X_FORWARDED_FOR')
THROTTLE_KEY_PREFIX = 'outlinker:throttle'


log_level = os.getenv('DJANGO_LOG_LEVEL', 'INFO').upper()
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': log_level,
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': log_level,
            'propagate': False,
        },
        'outlinker': {
            'handlers': ['console'],
            'level': os.getenv('OUTLINKER_LOG_LEVEL', log_level).upper(),
            'propagate': False,
        },
        # httpx logs full request URLs, which carry the search API key
        'httpx': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False,
        },
    },
}
