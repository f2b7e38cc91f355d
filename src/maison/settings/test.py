"""Test settings: in-memory database, local cache and outbox email."""

from .base import *  # noqa: F401,F403

DEBUG = False

SECRET_KEY = "test-secret-key-not-for-production"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "maison-tests",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
MAISON["EMAIL_ENABLED"] = True  # noqa: F405

STRIPE_SECRET_KEY = "sk_test_maison"
STRIPE_WEBHOOK_SECRET = "whsec_test_maison"

MIDDLEWARE = [m for m in MIDDLEWARE if m != "whitenoise.middleware.WhiteNoiseMiddleware"]  # noqa: F405

LOGGING["loggers"]["maison"]["level"] = "WARNING"  # noqa: F405
