from django.test import SimpleTestCase

from core.payments.exceptions import ValidationError
from core.payments.services import FundsConfirmed, TransferFailed, UnrecognizedEvent
from core.payments.services.events import translate_event

from .helpers import webhook_payload


class TranslateEventTests(SimpleTestCase):
    def test_charge_and_transfer_success_translate_alike(self):
        charge = translate_event(webhook_payload("charge.success", "R1", "ada@example.com"))
        transfer = translate_event(webhook_payload("transfer.success", "R1", "ada@example.com"))

        self.assertIsInstance(charge, FundsConfirmed)
        self.assertIsInstance(transfer, FundsConfirmed)
        self.assertEqual((charge.reference, charge.payer_email), (transfer.reference, transfer.payer_email))
        self.assertEqual(charge.source, "charge.success")
        self.assertEqual(transfer.source, "transfer.success")

    def test_transfer_failed(self):
        event = translate_event(webhook_payload("transfer.failed", "R2", "grace@example.com"))

        self.assertEqual(event, TransferFailed(reference="R2", payer_email="grace@example.com"))

    def test_unknown_event_is_unrecognized_without_data_checks(self):
        event = translate_event({"event": "subscription.create"})

        self.assertEqual(event, UnrecognizedEvent(name="subscription.create"))

    def test_values_are_stripped(self):
        event = translate_event(webhook_payload("charge.success", "  R1 ", " ada@example.com"))

        self.assertEqual(event.reference, "R1")
        self.assertEqual(event.payer_email, "ada@example.com")

    def test_malformed_bodies_are_rejected(self):
        bad_payloads = [
            [],
            "charge.success",
            {},
            {"event": ""},
            {"event": "charge.success"},
            {"event": "charge.success", "data": "nope"},
            {"event": "charge.success", "data": {"customer": {"email": "ada@example.com"}}},
            {"event": "charge.success", "data": {"reference": "R1"}},
            {"event": "transfer.failed", "data": {"reference": "R1", "customer": {}}},
        ]
        for payload in bad_payloads:
            with self.subTest(payload=payload):
                with self.assertRaises(ValidationError) as ctx:
                    translate_event(payload)
                self.assertEqual(ctx.exception.status_code, 400)

    def test_missing_field_is_named_in_details(self):
        with self.assertRaises(ValidationError) as ctx:
            translate_event({"event": "charge.success", "data": {"customer": {"email": "a@b.c"}}})

        self.assertEqual(ctx.exception.details, {"field": "data.reference"})
