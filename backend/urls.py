"""
Course Payments Backend URL Configuration

URL Structure:
- /admin/: Django admin (Jazzmin)
- /api/academy/: Tokens and buyer self-service
- /api/payments/: Purchase, webhook and reporting endpoints
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/academy/", include("academy.urls")),
    path("api/payments/", include("core.payments.urls")),
]
