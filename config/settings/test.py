"""Test settings.

Everything runs in process: sqlite, local memory cache (so reservation
locks use CacheLock), in-memory file storage, eager Celery tasks and the
locmem email backend.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'test-db.sqlite3',  # noqa: F405
    }
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
        'LOCATION': 'office-booking-tests',
    }
}

STORAGES = {
    'default': {
        'BACKEND': 'django.core.files.storage.InMemoryStorage',
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

RESERVATION_LOCK_BACKEND = 'shared.infrastructure.locks.CacheLock'
RESERVATION_LOCK_TIMEOUT = 10
RESERVATION_LOCK_WAIT = 1
RESERVATION_MONTHLY_DISCOUNT_MODE = 'legacy'
