"""
Notification Dispatcher

Sends the first-purchase welcome message through Django's mail framework.
The transport is configured with the standard `EMAIL_*` settings; tests use
the in-memory backend.
"""

import logging
import smtplib

from django.conf import settings
from django.core.mail import send_mail

from ..exceptions import NotificationError

logger = logging.getLogger(__name__)

WELCOME_SUBJECT = "Welcome to your new course"


def send_welcome_email(full_name: str, email: str) -> None:
    """
    Dispatch the welcome message to a first-time buyer.

    Raises:
        NotificationError: If the mail transport fails
    """
    greeting = f"Hi {full_name}," if full_name else "Hi,"
    message = (
        f"{greeting}\n\n"
        "Thank you for your purchase. Your course is now available in your account.\n\n"
        f"{settings.FRONTEND_URL}"
    )
    try:
        send_mail(
            WELCOME_SUBJECT,
            message,
            settings.DEFAULT_FROM_EMAIL,
            [email],
            fail_silently=False,
        )
    except (smtplib.SMTPException, OSError) as e:
        raise NotificationError(f"Welcome email to {email} failed: {e}")

    logger.info("Welcome email sent to %s.", email)
