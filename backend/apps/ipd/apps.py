"""IPD app configuration."""
from django.apps import AppConfig


class IpdConfig(AppConfig):
    """Configuration for the IPD engine app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.ipd'
    verbose_name = "Iterated Prisoner's Dilemma"
