"""
Production settings
"""
from .base import *  # noqa: F401,F403

DEBUG = False

# Production security settings
SECURE_SSL_REDIRECT = True
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = 'DENY'

# Production database must come from DATABASE_URL
_default_db = env.db('DATABASE_URL')  # noqa: F405
_default_db.setdefault('CONN_MAX_AGE', 60)
DATABASES['default'] = _default_db  # noqa: F405
