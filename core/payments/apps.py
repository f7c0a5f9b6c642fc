"""
Payments AppConfig
==================

Django application configuration for `core.payments`. The app label is
`payments`, so tables and migrations live under that label.

Author: Course Payments Team
Date: 2026-10-19
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    """
    App configuration for the `core.payments` package.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "core.payments"
    label = "payments"
    verbose_name = "Payments"
