from datetime import timedelta
from decimal import Decimal
from io import StringIO
from unittest.mock import patch

from django.core import mail
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase
from django.utils import timezone

from academy.models import Profile
from core.payments.exceptions import GatewayError
from core.payments.models import PaymentRecord
from core.payments.services.gateway import GatewayVerification

from .helpers import create_buyer, create_course, create_pending_payment

VERIFY = "core.payments.services.gateway.PaystackClient.verify_transaction"


def verification(reference, status="success", email="ada@example.com"):
    return GatewayVerification(reference=reference, status=status, email=email, amount=Decimal("100"))


class VerifyPendingPaymentsCommandTests(TestCase):
    def setUp(self):
        self.user = create_buyer()
        self.course = create_course()
        self.stale = create_pending_payment(self.user, self.course, reference="R_OLD")
        self.fresh = create_pending_payment(self.user, create_course(title="Fresh"), reference="R_NEW")
        PaymentRecord.objects.filter(pk=self.stale.pk).update(created_at=timezone.now() - timedelta(hours=2))

    def _call(self, *args):
        out = StringIO()
        call_command("verify_pending_payments", *args, stdout=out, stderr=StringIO())
        return out.getvalue()

    @patch(VERIFY)
    def test_reconciles_paid_stale_payment(self, mock_verify):
        mock_verify.side_effect = lambda reference: verification(reference)

        output = self._call("--older-than", "30")

        mock_verify.assert_called_once_with("R_OLD")
        self.stale.refresh_from_db()
        self.fresh.refresh_from_db()
        self.assertEqual(self.stale.status, PaymentRecord.Status.SUCCESS)
        self.assertEqual(self.fresh.status, PaymentRecord.Status.PENDING)
        self.assertTrue(Profile.objects.get(user=self.user).owns_course(self.course.pk))
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn("1 payment(s) reconciled.", output)

    @patch(VERIFY)
    def test_unpaid_payment_stays_pending(self, mock_verify):
        mock_verify.side_effect = lambda reference: verification(reference, status="abandoned")

        output = self._call()

        self.stale.refresh_from_db()
        self.assertEqual(self.stale.status, PaymentRecord.Status.PENDING)
        self.assertIn("still abandoned", output)

    @patch(VERIFY)
    def test_dry_run_changes_nothing(self, mock_verify):
        mock_verify.side_effect = lambda reference: verification(reference)

        output = self._call("--dry-run")

        self.stale.refresh_from_db()
        self.assertEqual(self.stale.status, PaymentRecord.Status.PENDING)
        self.assertIn("would reconcile", output)
        self.assertEqual(len(mail.outbox), 0)

    @patch(VERIFY, side_effect=GatewayError("Gateway request timed out after 30s"))
    def test_gateway_failure_raises_command_error(self, _):
        with self.assertRaises(CommandError):
            self._call()

        self.stale.refresh_from_db()
        self.assertEqual(self.stale.status, PaymentRecord.Status.PENDING)

    @patch(VERIFY)
    def test_nothing_stale(self, mock_verify):
        output = self._call("--older-than", "600")

        mock_verify.assert_not_called()
        self.assertIn("No stale pending payments found.", output)
