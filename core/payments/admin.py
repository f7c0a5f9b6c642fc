"""
Payments Django Admin Configuration

Ledger entries are read-only in the admin: they are created by purchase
initiation and only changed by webhook reconciliation.
"""

from typing import Optional

from django.contrib import admin
from django.http import HttpRequest

from .models import PaymentRecord


@admin.register(PaymentRecord)
class PaymentRecordAdmin(admin.ModelAdmin):
    list_display = ("reference", "email", "course", "amount", "currency", "status", "created_at")
    list_filter = ("status", "currency", "created_at")
    search_fields = ("reference", "email", "full_name")
    readonly_fields = (
        "reference",
        "user",
        "course",
        "amount",
        "currency",
        "email",
        "full_name",
        "status",
        "created_at",
        "updated_at",
    )
    date_hierarchy = "created_at"

    def has_add_permission(self, request: HttpRequest) -> bool:
        return False

    def has_change_permission(self, request: HttpRequest, obj: Optional[PaymentRecord] = None) -> bool:
        return False
