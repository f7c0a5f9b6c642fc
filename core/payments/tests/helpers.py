"""
Shared fixtures for the payments test-suite.
"""

from decimal import Decimal
from unittest.mock import MagicMock

from django.contrib.auth.models import User

from academy.models import Course, Profile
from core.payments.models import PaymentRecord


def create_buyer(email="ada@example.com", username=None, full_name="Ada Lovelace", role=Profile.Role.USER) -> User:
    user = User.objects.create_user(
        username=username or email.split("@")[0],
        email=email,
        password="Musterpassword",
    )
    Profile.objects.filter(user=user).update(full_name=full_name, role=role)
    user.refresh_from_db()
    return user


def create_course(title="Intro to Python", price="100.00") -> Course:
    return Course.objects.create(title=title, price=Decimal(price))


def create_pending_payment(user, course, reference="ref_001", amount="100.00", email=None, full_name="Ada Lovelace") -> PaymentRecord:
    return PaymentRecord.objects.create(
        reference=reference,
        user=user,
        course=course,
        amount=Decimal(amount),
        email=email or user.email,
        full_name=full_name,
    )


def webhook_payload(event, reference, email) -> dict:
    return {
        "event": event,
        "data": {
            "reference": reference,
            "status": "success",
            "customer": {"email": email},
        },
    }


def gateway_response(status_code=200, payload=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload if payload is not None else {}
    response.text = ""
    return response


def initialize_ok(reference="ref_001") -> dict:
    return {
        "status": True,
        "message": "Authorization URL created",
        "data": {
            "authorization_url": f"https://checkout.paystack.com/{reference}",
            "access_code": f"ac_{reference}",
            "reference": reference,
        },
    }
