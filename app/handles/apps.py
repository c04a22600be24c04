"""
Django app configuration for handles.
"""

from django.apps import AppConfig


class HandlesConfig(AppConfig):
    """Configuration for the handles application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "handles"
    verbose_name = "Handles"
