"""
Payment Ledger Models
=====================

The ledger stores one `PaymentRecord` per purchase attempt, keyed by the
transaction reference issued by the gateway.

Lifecycle
---------
    pending ──► success   (terminal)
       │
       └─────► failed    (terminal)

A record is created `pending` by the purchase initiator and afterwards only
mutated by the webhook reconciler. Transitions are compare-and-set updates
(`UPDATE ... WHERE status = 'pending'`), so two concurrent deliveries of the
same event observe exactly one state change between them.

Author: Course Payments Team
Date: 2026-10-19
"""

from __future__ import annotations

import enum
import logging
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import Count, Sum
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

logger = logging.getLogger(__name__)


class Transition(enum.Enum):
    """Result of a conditional status update."""

    APPLIED = "applied"
    ALREADY_IN_STATE = "already_in_state"
    TERMINAL_CONFLICT = "terminal_conflict"
    MISSING = "missing"


class PaymentRecordQuerySet(models.QuerySet):
    def successful(self) -> "PaymentRecordQuerySet":
        return self.filter(status=PaymentRecord.Status.SUCCESS)

    def pending(self) -> "PaymentRecordQuerySet":
        return self.filter(status=PaymentRecord.Status.PENDING)

    def for_course(self, course_id) -> "PaymentRecordQuerySet":
        return self.filter(course_id=course_id)

    def _transition(self, reference: str, target: str) -> Transition:
        updated = self.filter(
            reference=reference, status=PaymentRecord.Status.PENDING
        ).update(status=target, updated_at=timezone.now())
        if updated == 1:
            logger.info("Payment %s: pending -> %s.", reference, target)
            return Transition.APPLIED

        current = self.filter(reference=reference).values_list("status", flat=True).first()
        if current is None:
            return Transition.MISSING
        if current == target:
            logger.info("Payment %s already %s, nothing to do.", reference, target)
            return Transition.ALREADY_IN_STATE

        logger.warning(
            "Payment %s is terminal (%s), ignoring transition to %s.",
            reference,
            current,
            target,
        )
        return Transition.TERMINAL_CONFLICT

    def mark_success(self, reference: str) -> Transition:
        return self._transition(reference, PaymentRecord.Status.SUCCESS)

    def mark_failed(self, reference: str) -> Transition:
        return self._transition(reference, PaymentRecord.Status.FAILED)

    def totals(self) -> dict:
        """
        Aggregate the queryset into count, revenue and distinct buyers.

        Distinct buyers are counted by email so that records whose user was
        removed still count.
        """
        aggregate = self.aggregate(
            count=Count("id"),
            total_amount=Sum("amount"),
            total_users=Count("email", distinct=True),
        )
        aggregate["total_amount"] = aggregate["total_amount"] or Decimal("0")
        return aggregate


class PaymentRecord(models.Model):
    """
    One purchase attempt.

    Attributes:
        reference: Gateway transaction reference (unique, immutable)
        user: Buyer account at initiation time
        course: Purchased course
        amount: Charged amount in `currency`
        currency: ISO currency code
        email: Buyer email submitted with the purchase
        full_name: Buyer name at initiation time, used for the welcome message
        status: pending, success or failed
    """

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        SUCCESS = "success", _("Success")
        FAILED = "failed", _("Failed")

    TERMINAL_STATUSES = (Status.SUCCESS, Status.FAILED)

    reference = models.CharField(
        max_length=100,
        unique=True,
        editable=False,
        verbose_name=_("Reference"),
        help_text=_("Transaction reference issued by the payment gateway"),
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        on_delete=models.SET_NULL,
        related_name="payment_records",
        verbose_name=_("User"),
    )
    course = models.ForeignKey(
        "academy.Course",
        null=True,
        on_delete=models.SET_NULL,
        related_name="payment_records",
        verbose_name=_("Course"),
    )
    amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        verbose_name=_("Amount"),
    )
    currency = models.CharField(max_length=3, default="NGN", verbose_name=_("Currency"))
    email = models.EmailField(verbose_name=_("Buyer Email"))
    full_name = models.CharField(max_length=200, blank=True, verbose_name=_("Buyer Name"))
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
        verbose_name=_("Status"),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PaymentRecordQuerySet.as_manager()

    class Meta:
        verbose_name = _("Payment Record")
        verbose_name_plural = _("Payment Records")
        ordering = ["-created_at"]
        db_table = "payments_payment_record"
        indexes = [
            models.Index(fields=["course", "status"], name="payment_course_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.reference} ({self.status})"

    @property
    def is_terminal(self) -> bool:
        return self.status in self.TERMINAL_STATUSES
