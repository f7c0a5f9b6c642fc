"""
Payment Service Exceptions

This module provides the exception hierarchy of the payment core and the
DRF exception handler that renders them. Every exception carries the HTTP
status it maps to and a stable machine-readable error code, so views can
simply raise and let the handler build the response body.

Author: Course Payments Team
Version: 1.0.0
"""

import logging
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class PaymentServiceException(Exception):
    """
    Base exception class for all payment core errors.

    Attributes:
        message (str): Human-readable error message
        status_code (int): HTTP status code returned to the caller
        error_code (str): Stable machine-readable error identifier
        details (Dict[str, Any]): Additional error details

    Example:
        >>> try:
        ...     initiate_purchase(...)
        ... except PaymentServiceException as e:
        ...     logger.error("Payment error: %s", e.message)
    """

    default_message = "Payment processing failed"
    default_status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_error_code = "payment_error"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message or self.default_message
        self.status_code = status_code or self.default_status_code
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to the public error body.

        Returns:
            Dictionary representation of the exception
        """
        body = {
            "success": False,
            "message": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(PaymentServiceException):
    """Raised when a request or webhook body is malformed."""

    default_message = "Invalid request body"
    default_status_code = status.HTTP_400_BAD_REQUEST
    default_error_code = "validation_error"


class NotFound(PaymentServiceException):
    """Raised when a user, course or payment record does not exist."""

    default_message = "Resource not found"
    default_status_code = status.HTTP_404_NOT_FOUND
    default_error_code = "not_found"

    def __init__(self, message: Optional[str] = None, resource: Optional[str] = None, **kwargs) -> None:
        details = kwargs.pop("details", None) or {}
        if resource:
            details["resource"] = resource
        super().__init__(message, details=details, **kwargs)


class NotFoundTransient(NotFound):
    """
    Raised when a webhook references a payment that is not visible yet.

    The gateway issues the reference before the pending record is written,
    so a confirmation can overtake its own initiation. The caller should
    re-deliver; the condition is expected to resolve by itself.
    """

    default_message = "Payment reference not known yet"
    default_error_code = "payment_not_yet_visible"

    def __init__(self, reference: str, message: Optional[str] = None) -> None:
        super().__init__(
            message or f"Payment {reference} not known yet, retry later",
            resource="payment",
            details={"reference": reference, "retryable": True},
        )
        self.reference = reference


class AlreadyOwned(PaymentServiceException):
    """Raised when a user tries to buy a course they already own."""

    default_message = "You have already purchased this course"
    default_status_code = status.HTTP_400_BAD_REQUEST
    default_error_code = "already_owned"


class DuplicateReference(PaymentServiceException):
    """Raised when the gateway hands out a reference that is already in the ledger."""

    default_message = "Payment reference already exists"
    default_status_code = status.HTTP_409_CONFLICT
    default_error_code = "duplicate_reference"


class GatewayError(PaymentServiceException):
    """
    Raised when a call to the payment gateway fails.

    Attributes:
        gateway_status (Optional[int]): HTTP status returned by the gateway, if any
    """

    default_message = "Payment gateway request failed"
    default_status_code = status.HTTP_502_BAD_GATEWAY
    default_error_code = "gateway_error"

    def __init__(self, message: Optional[str] = None, gateway_status: Optional[int] = None) -> None:
        self.gateway_status = gateway_status
        details = {"gateway_status": gateway_status} if gateway_status else None
        super().__init__(message, details=details)


class NotificationError(PaymentServiceException):
    """Raised when the welcome message could not be dispatched."""

    default_message = "Notification could not be sent"
    default_status_code = status.HTTP_502_BAD_GATEWAY
    default_error_code = "notification_error"


class Unauthorized(PaymentServiceException):
    """Raised when the caller lacks the role required for an operation."""

    default_message = "Not authorized"
    default_status_code = status.HTTP_401_UNAUTHORIZED
    default_error_code = "unauthorized"


class InvalidSignature(Unauthorized):
    """Raised when a webhook signature does not match the request body."""

    default_message = "Invalid webhook signature"
    default_error_code = "invalid_signature"


def payments_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """
    DRF exception handler producing ``{"success": false, "message": ...}`` bodies.

    Payment core exceptions are rendered from their own status and error
    code. DRF's exceptions keep their status, with the detail flattened into
    ``message``. Anything else is left to Django (500).
    """
    if isinstance(exc, PaymentServiceException):
        if exc.status_code >= 500:
            logger.error("%s: %s", exc.__class__.__name__, exc.message)
        else:
            logger.info("%s: %s", exc.__class__.__name__, exc.message)
        return Response(exc.to_dict(), status=exc.status_code)

    response = exception_handler(exc, context)
    if response is None:
        return None

    detail = response.data
    if isinstance(detail, dict) and "detail" in detail:
        message = str(detail["detail"])
        errors = None
    else:
        message = "Invalid request body" if response.status_code == 400 else str(detail)
        errors = detail

    body = {
        "success": False,
        "message": message,
        "error_code": getattr(exc, "default_code", "error"),
    }
    if errors is not None:
        body["details"] = errors
    response.data = body
    return response
