"""
Webhook Reconciler
==================

Consumes translated gateway events and drives the ledger, the entitlement
store and the welcome notification.

Funds confirmed (`charge.success` / `transfer.success`)
-------------------------------------------------------
1. Resolve the ledger entry by reference. A missing entry is reported as
   `NotFoundTransient`: the confirmation may have overtaken the initiation
   that wrote it, and the gateway will re-deliver. Nothing is fabricated
   from the event alone.
2. Conditional `pending → success` transition. Re-delivery finds the entry
   already `success` and writes nothing; an entry that already `failed`
   stays failed and no further effect is applied.
3. Resolve the buyer by the email carried in the event.
4. Resolve the course from the ledger entry. A missing course is reported
   as `NotFound`; the status transition stays committed and the grant can
   be retried by re-delivery.
5. Grant the course (set union, per-user lock).
6. Claim the welcome flag and, only when this delivery won the claim, send
   the welcome message. A failed send is logged and the claim is released;
   the grant is never rolled back for it.

Transfer failed (`transfer.failed`)
-----------------------------------
Removes the ledger entry and the buyer account named by the event. With
`PAYMENTS_PURGE_ON_TRANSFER_FAILED = False` the entry is marked `failed`
instead and the account is kept. A delivery that finds neither entry nor
account (a replay after the purge) is acknowledged without effect.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction

from academy.models import Course, Profile

from ..exceptions import NotFound, NotFoundTransient, NotificationError
from ..models import PaymentRecord, Transition
from .entitlements import grant_course
from .events import FundsConfirmed, GatewayEvent, TransferFailed, UnrecognizedEvent
from .notifications import send_welcome_email

logger = logging.getLogger(__name__)
User = get_user_model()


@dataclass
class ReconciliationOutcome:
    """What a single webhook delivery changed."""

    event: str
    reference: Optional[str] = None
    message: str = ""
    status_changed: bool = False
    course_granted: bool = False
    welcome_sent: bool = False
    record_removed: bool = False
    user_removed: bool = False

    def to_dict(self) -> dict:
        return {
            "success": True,
            "message": self.message,
            "event": self.event,
            "reference": self.reference,
            "status_changed": self.status_changed,
            "course_granted": self.course_granted,
            "welcome_sent": self.welcome_sent,
            "record_removed": self.record_removed,
            "user_removed": self.user_removed,
        }


class WebhookReconciler:
    """
    Applies gateway events to the ledger and the entitlement store.

    Args:
        notifier: Callable ``(full_name, email)`` sending the welcome message
        purge_on_transfer_failed: Override for ``PAYMENTS_PURGE_ON_TRANSFER_FAILED``
    """

    def __init__(
        self,
        notifier: Callable[[str, str], None] = send_welcome_email,
        purge_on_transfer_failed: Optional[bool] = None,
    ) -> None:
        self.notifier = notifier
        if purge_on_transfer_failed is None:
            purge_on_transfer_failed = settings.PAYMENTS_PURGE_ON_TRANSFER_FAILED
        self.purge_on_transfer_failed = purge_on_transfer_failed

    def reconcile(self, event: GatewayEvent) -> ReconciliationOutcome:
        if isinstance(event, FundsConfirmed):
            return self.funds_confirmed(event)
        if isinstance(event, TransferFailed):
            return self.transfer_failed(event)
        if isinstance(event, UnrecognizedEvent):
            logger.debug("Ignoring gateway event type: %s", event.name)
            return ReconciliationOutcome(event=event.name, message="Event ignored")
        raise TypeError(f"Unsupported event {event!r}")

    # ---------- funds confirmed ----------

    def funds_confirmed(self, event: FundsConfirmed) -> ReconciliationOutcome:
        reference = event.reference
        logger.info("[webhook] %s ref=%s email=%s", event.source, reference, event.payer_email)

        record = PaymentRecord.objects.filter(reference=reference).first()
        if record is None:
            logger.warning("Payment %s not found yet, asking gateway to re-deliver.", reference)
            raise NotFoundTransient(reference)

        transition = PaymentRecord.objects.mark_success(reference)
        if transition is Transition.MISSING:
            raise NotFoundTransient(reference)

        outcome = ReconciliationOutcome(
            event=event.source,
            reference=reference,
            status_changed=transition is Transition.APPLIED,
        )
        if transition is Transition.TERMINAL_CONFLICT:
            outcome.message = "Payment already failed, confirmation ignored"
            return outcome

        user = User.objects.filter(email__iexact=event.payer_email).order_by("pk").first()
        if user is None:
            logger.error("Webhook: user %s not found (ref=%s).", event.payer_email, reference)
            raise NotFound("User not found", resource="user")

        course = Course.objects.filter(pk=record.course_id).first() if record.course_id else None
        if course is None:
            logger.error("Webhook: course %s not found (ref=%s).", record.course_id, reference)
            raise NotFound("Course not found", resource="course")

        profile, _ = Profile.objects.get_or_create(user=user)
        outcome.course_granted = grant_course(profile, course, reference=reference)
        outcome.welcome_sent = self._welcome_once(profile, record.full_name, event.payer_email)
        outcome.message = "Payment confirmed"
        return outcome

    def _welcome_once(self, profile: Profile, full_name: str, email: str) -> bool:
        claimed_at = Profile.objects.claim_welcome(profile.pk)
        if claimed_at is None:
            logger.debug("User %s already welcomed.", profile.user_id)
            return False

        try:
            self.notifier(full_name or profile.display_name, email)
        except NotificationError:
            logger.exception("Welcome message for user %s failed; claim released.", profile.user_id)
            Profile.objects.release_welcome(profile.pk, claimed_at)
            return False
        except Exception:
            logger.exception("Welcome notifier crashed for user %s; claim released.", profile.user_id)
            Profile.objects.release_welcome(profile.pk, claimed_at)
            raise
        return True

    # ---------- transfer failed ----------

    def transfer_failed(self, event: TransferFailed) -> ReconciliationOutcome:
        reference = event.reference
        logger.info("[webhook] transfer.failed ref=%s email=%s", reference, event.payer_email)

        record = PaymentRecord.objects.filter(reference=reference).first()
        user = User.objects.filter(email__iexact=event.payer_email).order_by("pk").first()
        outcome = ReconciliationOutcome(event="transfer.failed", reference=reference)

        if record is None and user is None:
            logger.warning("Nothing left to purge for failed transfer %s, acknowledging.", reference)
            outcome.message = "Failed transfer already purged"
            return outcome

        if not self.purge_on_transfer_failed:
            if record is not None:
                outcome.status_changed = (
                    PaymentRecord.objects.mark_failed(reference) is Transition.APPLIED
                )
            outcome.message = "Payment marked failed"
            return outcome

        with transaction.atomic():
            if record is not None:
                if record.status == PaymentRecord.Status.SUCCESS:
                    logger.warning("Removing settled payment %s on transfer.failed.", reference)
                record.delete()
                outcome.record_removed = True
            if user is not None:
                logger.warning("Removing user %s on transfer.failed (ref=%s).", user.pk, reference)
                user.delete()
                outcome.user_removed = True

        outcome.message = "Failed transfer purged"
        return outcome
