"""
Test settings: in-memory SQLite, fast hashing, UTC.
"""
import os

os.environ.setdefault('DATABASE_URL', 'sqlite://:memory:')

from .base import *  # noqa: E402,F401,F403

DEBUG = False
TIME_ZONE = 'UTC'

PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

LOGGING['root']['level'] = 'WARNING'  # noqa: F405
