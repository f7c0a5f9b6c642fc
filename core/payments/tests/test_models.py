from decimal import Decimal

from django.db import IntegrityError, transaction
from django.test import TestCase

from core.payments.models import PaymentRecord, Transition

from .helpers import create_buyer, create_course, create_pending_payment


class PaymentRecordTransitionTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.user = create_buyer()
        cls.course = create_course()

    def setUp(self):
        self.record = create_pending_payment(self.user, self.course, reference="R1")

    def test_new_record_is_pending(self):
        self.assertEqual(self.record.status, PaymentRecord.Status.PENDING)
        self.assertFalse(self.record.is_terminal)
        self.assertEqual(self.record.currency, "NGN")

    def test_mark_success_applies_once(self):
        self.assertIs(PaymentRecord.objects.mark_success("R1"), Transition.APPLIED)
        self.assertIs(PaymentRecord.objects.mark_success("R1"), Transition.ALREADY_IN_STATE)

        self.record.refresh_from_db()
        self.assertEqual(self.record.status, PaymentRecord.Status.SUCCESS)
        self.assertTrue(self.record.is_terminal)

    def test_terminal_states_do_not_flip(self):
        PaymentRecord.objects.mark_failed("R1")

        self.assertIs(PaymentRecord.objects.mark_success("R1"), Transition.TERMINAL_CONFLICT)
        self.record.refresh_from_db()
        self.assertEqual(self.record.status, PaymentRecord.Status.FAILED)

    def test_unknown_reference_is_missing(self):
        self.assertIs(PaymentRecord.objects.mark_success("nope"), Transition.MISSING)
        self.assertIs(PaymentRecord.objects.mark_failed("nope"), Transition.MISSING)

    def test_reference_is_unique(self):
        with self.assertRaises(IntegrityError), transaction.atomic():
            create_pending_payment(self.user, self.course, reference="R1")

    def test_deleting_user_keeps_record(self):
        self.user.delete()

        self.record.refresh_from_db()
        self.assertIsNone(self.record.user_id)
        self.assertEqual(self.record.email, "ada@example.com")


class PaymentRecordTotalsTests(TestCase):
    @classmethod
    def setUpTestData(cls):
        ada = create_buyer()
        grace = create_buyer(email="grace@example.com", full_name="Grace Hopper")
        course = create_course()
        create_pending_payment(ada, course, reference="R1", amount="100.00")
        create_pending_payment(ada, course, reference="R2", amount="50.50")
        create_pending_payment(grace, course, reference="R3", amount="25.00")
        create_pending_payment(grace, course, reference="R4", amount="999.00")
        for reference in ("R1", "R2", "R3"):
            PaymentRecord.objects.mark_success(reference)

    def test_totals_over_successful(self):
        totals = PaymentRecord.objects.successful().totals()

        self.assertEqual(totals["count"], 3)
        self.assertEqual(totals["total_amount"], Decimal("175.50"))
        self.assertEqual(totals["total_users"], 2)

    def test_totals_of_empty_queryset(self):
        totals = PaymentRecord.objects.none().totals()

        self.assertEqual(totals["count"], 0)
        self.assertEqual(totals["total_amount"], Decimal("0"))
