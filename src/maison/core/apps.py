"""Core app configuration."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the core application."""

    name = "maison.core"
    verbose_name = "Maison Core"
    default_auto_field = "django.db.models.BigAutoField"
