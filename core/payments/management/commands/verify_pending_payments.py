"""
Verify Pending Payments Management Command

Asks the gateway about ledger entries that are still pending after a grace
period and feeds confirmed ones through the webhook reconciler, exactly as
if the `charge.success` event had been delivered. Useful when webhooks were
lost (endpoint down for longer than the gateway's retry window).

Nothing here runs automatically; schedule it from cron if needed.

Author: Course Payments Team
Version: 1.0.0
"""

import logging
from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from core.payments.exceptions import PaymentServiceException
from core.payments.models import PaymentRecord
from core.payments.services import FundsConfirmed, WebhookReconciler, get_gateway_client

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Verifies stale pending payments with the gateway and reconciles confirmed ones."

    def add_arguments(self, parser):
        parser.add_argument(
            "--older-than",
            type=int,
            default=settings.PAYMENTS_PENDING_VERIFY_MINUTES,
            help="Only check payments pending for at least this many minutes.",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report what would be reconciled without changing anything.",
        )

    def handle(self, *args, **options):
        cutoff = timezone.now() - timedelta(minutes=options["older_than"])
        pending = PaymentRecord.objects.pending().filter(created_at__lt=cutoff).order_by("created_at")

        count = pending.count()
        if count == 0:
            self.stdout.write(self.style.SUCCESS("No stale pending payments found."))
            return

        self.stdout.write(f"{count} pending payment(s) older than {cutoff:%Y-%m-%d %H:%M:%S}:")

        gateway = get_gateway_client()
        reconciler = WebhookReconciler()
        confirmed = failed = 0

        for record in pending:
            try:
                verification = gateway.verify_transaction(record.reference)
            except PaymentServiceException as e:
                failed += 1
                self.stderr.write(f"  - {record.reference}: gateway lookup failed ({e.message})")
                continue

            if not verification.is_successful:
                self.stdout.write(f"  - {record.reference}: still {verification.status or 'unknown'}")
                continue

            if options["dry_run"]:
                self.stdout.write(f"  - {record.reference}: paid, would reconcile")
                continue

            event = FundsConfirmed(
                reference=record.reference,
                payer_email=verification.email or record.email,
                source="transaction.verify",
            )
            try:
                reconciler.reconcile(event)
            except PaymentServiceException as e:
                failed += 1
                logger.error("Reconciling %s failed: %s", record.reference, e.message)
                self.stderr.write(f"  - {record.reference}: reconcile failed ({e.message})")
                continue

            confirmed += 1
            self.stdout.write(f"  - {record.reference}: reconciled")

        self.stdout.write(self.style.SUCCESS(f"{confirmed} payment(s) reconciled."))
        if failed:
            raise CommandError(f"{failed} payment(s) could not be verified or reconciled.")
