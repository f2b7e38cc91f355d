"""WSGI config for the Maison Aurèle storefront."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "maison.settings.prod")

application = get_wsgi_application()
