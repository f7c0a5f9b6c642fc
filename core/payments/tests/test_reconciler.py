import smtplib
from unittest.mock import patch

from django.contrib.auth.models import User
from django.core import mail
from django.test import TestCase

from academy.models import CourseEnrollment, Profile
from core.payments.exceptions import NotFound, NotFoundTransient
from core.payments.models import PaymentRecord
from core.payments.services import FundsConfirmed, TransferFailed, UnrecognizedEvent, WebhookReconciler

from .helpers import create_buyer, create_course, create_pending_payment


class FundsConfirmedTests(TestCase):
    def setUp(self):
        self.user = create_buyer()
        self.course = create_course()
        self.record = create_pending_payment(self.user, self.course, reference="R1")
        self.reconciler = WebhookReconciler()

    def _confirm(self, reference="R1", email="ada@example.com", source="charge.success"):
        return self.reconciler.reconcile(FundsConfirmed(reference=reference, payer_email=email, source=source))

    def test_first_confirmation_settles_grants_and_welcomes(self):
        outcome = self._confirm()

        self.record.refresh_from_db()
        profile = Profile.objects.get(user=self.user)
        self.assertEqual(self.record.status, PaymentRecord.Status.SUCCESS)
        self.assertTrue(profile.owns_course(self.course.pk))
        self.assertTrue(profile.has_received_welcome)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["ada@example.com"])
        self.assertIn("Ada Lovelace", mail.outbox[0].body)
        self.assertTrue(outcome.status_changed)
        self.assertTrue(outcome.course_granted)
        self.assertTrue(outcome.welcome_sent)

    def test_replayed_confirmation_is_a_no_op(self):
        self._confirm()
        welcomed_at = Profile.objects.get(user=self.user).welcomed_at

        outcome = self._confirm()

        self.record.refresh_from_db()
        self.assertEqual(self.record.status, PaymentRecord.Status.SUCCESS)
        self.assertEqual(CourseEnrollment.objects.filter(profile__user=self.user).count(), 1)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(Profile.objects.get(user=self.user).welcomed_at, welcomed_at)
        self.assertFalse(outcome.status_changed)
        self.assertFalse(outcome.course_granted)
        self.assertFalse(outcome.welcome_sent)

    def test_transfer_success_is_equivalent_to_charge_success(self):
        outcome = self._confirm(source="transfer.success")

        self.record.refresh_from_db()
        self.assertEqual(self.record.status, PaymentRecord.Status.SUCCESS)
        self.assertTrue(outcome.course_granted)
        self.assertEqual(len(mail.outbox), 1)

        self._confirm(source="charge.success")
        self.assertEqual(CourseEnrollment.objects.count(), 1)
        self.assertEqual(len(mail.outbox), 1)

    def test_welcome_is_sent_once_across_different_courses(self):
        second_course = create_course(title="Data Science", price="150.00")
        create_pending_payment(self.user, second_course, reference="R2", amount="150.00")

        self._confirm("R1")
        self._confirm("R2")
        self._confirm("R2")

        profile = Profile.objects.get(user=self.user)
        self.assertEqual(profile.courses.count(), 2)
        self.assertEqual(len(mail.outbox), 1)
        self.assertTrue(profile.has_received_welcome)

    def test_already_welcomed_user_gets_no_message(self):
        Profile.objects.claim_welcome(self.user.profile.pk)

        outcome = self._confirm()

        self.assertTrue(outcome.course_granted)
        self.assertFalse(outcome.welcome_sent)
        self.assertEqual(len(mail.outbox), 0)

    def test_unknown_reference_is_transient(self):
        with self.assertRaises(NotFoundTransient) as ctx:
            self._confirm(reference="not-yet-written")

        self.assertEqual(ctx.exception.reference, "not-yet-written")
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertFalse(PaymentRecord.objects.filter(reference="not-yet-written").exists())

    def test_unknown_user_keeps_status_update(self):
        with self.assertRaises(NotFound) as ctx:
            self._confirm(email="stranger@example.com")

        self.assertNotIsInstance(ctx.exception, NotFoundTransient)
        self.record.refresh_from_db()
        self.assertEqual(self.record.status, PaymentRecord.Status.SUCCESS)
        self.assertEqual(CourseEnrollment.objects.count(), 0)

    def test_user_is_resolved_by_event_email_case_insensitively(self):
        outcome = self._confirm(email="ADA@Example.com")

        self.assertTrue(outcome.course_granted)
        self.assertTrue(Profile.objects.get(user=self.user).owns_course(self.course.pk))

    def test_missing_course_keeps_status_update(self):
        self.course.delete()

        with self.assertRaises(NotFound):
            self._confirm()

        self.record.refresh_from_db()
        self.assertEqual(self.record.status, PaymentRecord.Status.SUCCESS)
        self.assertIsNone(self.record.course_id)
        self.assertEqual(len(mail.outbox), 0)

    def test_failed_payment_is_not_revived(self):
        PaymentRecord.objects.mark_failed("R1")

        outcome = self._confirm()

        self.record.refresh_from_db()
        self.assertEqual(self.record.status, PaymentRecord.Status.FAILED)
        self.assertFalse(outcome.course_granted)
        self.assertEqual(CourseEnrollment.objects.count(), 0)
        self.assertEqual(len(mail.outbox), 0)

    @patch("core.payments.services.notifications.send_mail", side_effect=smtplib.SMTPException("down"))
    def test_notification_failure_keeps_grant_and_releases_claim(self, send_mail):
        outcome = self._confirm()

        profile = Profile.objects.get(user=self.user)
        self.assertTrue(profile.owns_course(self.course.pk))
        self.assertFalse(profile.has_received_welcome)
        self.assertFalse(outcome.welcome_sent)
        send_mail.assert_called_once()

        send_mail.side_effect = None
        outcome = self._confirm()
        self.assertTrue(outcome.welcome_sent)
        self.assertTrue(Profile.objects.get(user=self.user).has_received_welcome)

    def test_crashing_notifier_releases_claim(self):
        def notifier(name, email):
            raise ValueError("bad header")

        with self.assertRaises(ValueError):
            WebhookReconciler(notifier=notifier).reconcile(
                FundsConfirmed(reference="R1", payer_email="ada@example.com", source="charge.success")
            )

        profile = Profile.objects.get(user=self.user)
        self.assertTrue(profile.owns_course(self.course.pk))
        self.assertFalse(profile.has_received_welcome)

        outcome = self._confirm()
        self.assertTrue(outcome.welcome_sent)
        self.assertEqual(len(mail.outbox), 1)

    def test_custom_notifier_receives_record_name_and_event_email(self):
        calls = []
        reconciler = WebhookReconciler(notifier=lambda name, email: calls.append((name, email)))
        self.record.full_name = "Augusta Ada King"
        self.record.save()

        reconciler.reconcile(FundsConfirmed(reference="R1", payer_email="ada@example.com", source="charge.success"))

        self.assertEqual(calls, [("Augusta Ada King", "ada@example.com")])


class TransferFailedTests(TestCase):
    def setUp(self):
        self.user = create_buyer(email="grace@example.com", full_name="Grace Hopper")
        self.course = create_course()
        self.record = create_pending_payment(self.user, self.course, reference="R2")

    def test_purges_payment_and_user(self):
        outcome = WebhookReconciler(purge_on_transfer_failed=True).reconcile(
            TransferFailed(reference="R2", payer_email="grace@example.com")
        )

        self.assertTrue(outcome.record_removed)
        self.assertTrue(outcome.user_removed)
        self.assertFalse(PaymentRecord.objects.filter(reference="R2").exists())
        self.assertFalse(User.objects.filter(pk=self.user.pk).exists())
        self.assertFalse(Profile.objects.filter(user_id=self.user.pk).exists())

    def test_marks_failed_when_purge_is_disabled(self):
        outcome = WebhookReconciler(purge_on_transfer_failed=False).reconcile(
            TransferFailed(reference="R2", payer_email="grace@example.com")
        )

        self.record.refresh_from_db()
        self.assertEqual(self.record.status, PaymentRecord.Status.FAILED)
        self.assertTrue(outcome.status_changed)
        self.assertTrue(User.objects.filter(pk=self.user.pk).exists())

    def test_replay_after_purge_is_acknowledged(self):
        reconciler = WebhookReconciler(purge_on_transfer_failed=True)
        event = TransferFailed(reference="R2", payer_email="grace@example.com")
        reconciler.reconcile(event)

        outcome = reconciler.reconcile(event)

        self.assertEqual(outcome.message, "Failed transfer already purged")
        self.assertFalse(outcome.record_removed)
        self.assertFalse(outcome.user_removed)


class UnrecognizedEventTests(TestCase):
    def test_is_acknowledged_without_effects(self):
        outcome = WebhookReconciler().reconcile(UnrecognizedEvent(name="subscription.create"))

        self.assertEqual(outcome.event, "subscription.create")
        self.assertEqual(outcome.message, "Event ignored")
        self.assertFalse(outcome.status_changed)
