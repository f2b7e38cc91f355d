"""Development settings."""

from .base import *  # noqa: F401,F403

DEBUG = True

SECRET_KEY = SECRET_KEY or "dev-secret-key-not-for-production"  # noqa: F405

ALLOWED_HOSTS = ["localhost", "127.0.0.1"]

EMAIL_BACKEND = "django.core.mail.backends.console.EmailBackend"
MAISON["EMAIL_ENABLED"] = True  # noqa: F405
