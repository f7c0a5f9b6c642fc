"""
Academy Application Configuration

This module contains the Django application configuration for the academy
app. It registers the course catalogue and the user profile models and
connects the profile signal handlers at startup.

Author: Course Payments Team
Version: 1.0.0
"""

from django.apps import AppConfig


class AcademyConfig(AppConfig):
    """
    Configuration class for the academy Django application.

    Attributes:
        default_auto_field: Default primary key field type for models
        name: Application name for Django registration
        verbose_name: Human-readable application name for admin interface
    """

    default_auto_field: str = "django.db.models.BigAutoField"
    name: str = "academy"
    verbose_name: str = "Academy"

    def ready(self) -> None:
        """
        Connect the profile signal handlers.

        The receivers live next to the models in ``users.models`` and are
        registered on import, so this only has to make sure that module is
        loaded once per process.
        """
        super().ready()
        from .users import models  # noqa: F401
