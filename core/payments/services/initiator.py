"""
Purchase Initiator

Creates the pending ledger entry for a purchase attempt. The gateway is
called first because it issues the reference the entry is keyed by; if it
fails nothing is written. A consequence is that a confirmation webhook can
arrive before the entry exists, which the reconciler reports as transient.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from academy.models import Course, Profile

from ..exceptions import AlreadyOwned, DuplicateReference, NotFound
from ..models import PaymentRecord
from .gateway import PaystackClient, get_gateway_client

logger = logging.getLogger(__name__)
User = get_user_model()


@dataclass(frozen=True)
class PurchaseResult:
    record: PaymentRecord
    reference: str
    authorization_url: str
    payload: Dict[str, Any]


class PurchaseInitiator:
    def __init__(self, gateway: Optional[PaystackClient] = None) -> None:
        self.gateway = gateway or get_gateway_client()

    def initiate(self, user_id, course_id, amount: Decimal, email: str) -> PurchaseResult:
        """
        Start a purchase of ``course_id`` for ``user_id``.

        Raises:
            NotFound: Unknown user or course
            AlreadyOwned: The user already owns the course
            GatewayError: The gateway did not issue a reference
            DuplicateReference: The issued reference already exists in the ledger
        """
        user = User.objects.filter(pk=user_id).first()
        if user is None:
            raise NotFound("User not found", resource="user")
        course = Course.objects.filter(pk=course_id).first()
        if course is None:
            raise NotFound("Course not found", resource="course")

        profile, _ = Profile.objects.get_or_create(user=user)
        if profile.owns_course(course.pk):
            logger.info("User %s already owns course %s, purchase rejected.", user.pk, course.pk)
            raise AlreadyOwned()

        init = self.gateway.initialize_transaction(
            amount,
            email,
            callback_url=settings.PAYSTACK_CALLBACK_URL or None,
            metadata={"user_id": str(user.pk), "course_id": str(course.pk)},
        )

        try:
            with transaction.atomic():
                record = PaymentRecord.objects.create(
                    reference=init.reference,
                    user=user,
                    course=course,
                    amount=amount,
                    currency=settings.PAYMENTS_CURRENCY,
                    email=email,
                    full_name=profile.display_name,
                    status=PaymentRecord.Status.PENDING,
                )
        except IntegrityError:
            logger.error("Gateway reference collision: %s already in ledger.", init.reference)
            raise DuplicateReference(details={"reference": init.reference})

        logger.info(
            "Created pending payment %s (user=%s, course=%s, amount=%s).",
            record.reference,
            user.pk,
            course.pk,
            amount,
        )
        return PurchaseResult(
            record=record,
            reference=init.reference,
            authorization_url=init.authorization_url,
            payload=init.payload,
        )
