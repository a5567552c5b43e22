from django.apps import AppConfig


class OutlinkerConfig(AppConfig):
    """Configuration for the outlinker Django app."""

    name = 'outlinker'
    verbose_name = 'Outlinker'
