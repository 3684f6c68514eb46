"""
Development settings
"""
from .base import *  # noqa: F401,F403

DEBUG = True

# Email backend (console for development)
EMAIL_BACKEND = 'django.core.mail.backends.console.EmailBackend'
