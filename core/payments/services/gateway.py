"""
Paystack Gateway Client

This module talks to the Paystack REST API. The gateway is an opaque
external collaborator: we ask it to initialize a transaction (which issues
the unique reference the ledger is keyed by) and, for operator tooling, to
verify the outcome of a transaction.

Every call is a single bounded HTTP request. Failures are translated into
:class:`GatewayError` and never retried here; retries belong to the caller.

Author: Course Payments Team
Version: 1.0.0
"""

import hashlib
import hmac
import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional

import requests
from django.conf import settings

from ..exceptions import GatewayError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GatewayInitialization:
    """Result of a successful `transaction/initialize` call."""

    reference: str
    authorization_url: str
    access_code: str = ""
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class GatewayVerification:
    """Result of a `transaction/verify/<reference>` call."""

    reference: str
    status: str
    email: str
    amount: Decimal

    @property
    def is_successful(self) -> bool:
        return self.status == "success"


def to_minor_units(amount) -> int:
    """Convert a major-unit amount (e.g. Naira) to the gateway's minor units (kobo)."""
    return int((Decimal(str(amount)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_signature(body: bytes, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha512).hexdigest()


def is_valid_signature(body: bytes, signature: Optional[str], secret: str) -> bool:
    """
    Check the `X-Paystack-Signature` header against the raw request body.
    """
    if not signature:
        return False
    return hmac.compare_digest(compute_signature(body, secret), signature)


class PaystackClient:
    """
    Minimal Paystack API client.

    Attributes:
        DEFAULT_BASE_URL (str): Paystack API root
        REQUEST_TIMEOUT (int): HTTP request timeout in seconds

    Example:
        >>> client = PaystackClient(secret_key="sk_test_xxx")
        >>> init = client.initialize_transaction(100, "buyer@example.com")
        >>> init.reference
        're_abc123'
    """

    DEFAULT_BASE_URL = "https://api.paystack.co"
    REQUEST_TIMEOUT = 30

    def __init__(
        self,
        secret_key: str,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        currency: Optional[str] = None,
    ) -> None:
        self.secret_key = secret_key
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout or self.REQUEST_TIMEOUT
        self.currency = currency

    @property
    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.secret_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def initialize_transaction(
        self,
        amount,
        email: str,
        callback_url: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> GatewayInitialization:
        """
        Ask the gateway for a new transaction reference.

        Args:
            amount: Amount in major units
            email: Payer email
            callback_url: Where the gateway redirects the buyer after paying
            metadata: Opaque data echoed back on webhooks

        Returns:
            The issued reference and authorization URL

        Raises:
            GatewayError: If the request fails or the response is unusable
        """
        body: Dict[str, Any] = {"amount": to_minor_units(amount), "email": email}
        if callback_url:
            body["callback_url"] = callback_url
        if metadata:
            body["metadata"] = metadata
        if self.currency:
            body["currency"] = self.currency

        payload = self._request("post", "/transaction/initialize", json=body)
        data = payload.get("data") or {}
        reference = data.get("reference")
        authorization_url = data.get("authorization_url")
        if not reference or not authorization_url:
            raise GatewayError("Gateway response is missing reference or authorization_url")

        logger.info("Gateway issued reference %s for %s.", reference, email)
        return GatewayInitialization(
            reference=reference,
            authorization_url=authorization_url,
            access_code=data.get("access_code", ""),
            payload=payload,
        )

    def verify_transaction(self, reference: str) -> GatewayVerification:
        """
        Look up the current outcome of a transaction.

        Raises:
            GatewayError: If the request fails or the response is unusable
        """
        payload = self._request("get", f"/transaction/verify/{reference}")
        data = payload.get("data") or {}
        customer = data.get("customer") or {}
        return GatewayVerification(
            reference=data.get("reference", reference),
            status=data.get("status", ""),
            email=customer.get("email", ""),
            amount=Decimal(data.get("amount") or 0) / 100,
        )

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = getattr(requests, method)(
                url, headers=self._headers, timeout=self.timeout, **kwargs
            )
        except requests.exceptions.Timeout:
            raise GatewayError(f"Gateway request timed out after {self.timeout}s")
        except requests.exceptions.RequestException as e:
            raise GatewayError(f"Gateway request failed: {e}")

        try:
            payload = response.json()
        except ValueError:
            logger.error("Gateway returned non-JSON response: %s - %s", response.status_code, response.text)
            raise GatewayError(
                f"Gateway returned an invalid response (status {response.status_code})",
                gateway_status=response.status_code,
            )

        if response.status_code >= 400 or not payload.get("status"):
            message = payload.get("message") or "Gateway rejected the request"
            logger.error("Gateway request %s %s failed: %s - %s", method.upper(), path, response.status_code, message)
            raise GatewayError(message, gateway_status=response.status_code)

        return payload


def get_gateway_client() -> PaystackClient:
    """Build a client from Django settings."""
    return PaystackClient(
        secret_key=settings.PAYSTACK_SECRET_KEY,
        base_url=settings.PAYSTACK_BASE_URL,
        timeout=settings.PAYSTACK_TIMEOUT,
        currency=settings.PAYMENTS_CURRENCY,
    )
