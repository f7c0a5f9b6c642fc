"""
Webhook Event Translation
=========================

Paystack reports received funds with two different event names:
`charge.success` (card/bank charge) and `transfer.success`. Both mean the
same thing to the course store, so they are translated here into one
internal `FundsConfirmed` event and the reconciler has a single code path.

Raw payload shape::

    {"event": "charge.success",
     "data": {"reference": "re_123", "customer": {"email": "a@b.c"}, ...}}

Handled event types:
- `charge.success`   → FundsConfirmed
- `transfer.success` → FundsConfirmed
- `transfer.failed`  → TransferFailed
- anything else      → UnrecognizedEvent (acknowledged, no effect)
"""

from dataclasses import dataclass
from typing import Any, Dict, Union

from ..exceptions import ValidationError

FUNDS_CONFIRMED_EVENTS = frozenset({"charge.success", "transfer.success"})
TRANSFER_FAILED_EVENTS = frozenset({"transfer.failed"})


@dataclass(frozen=True)
class FundsConfirmed:
    reference: str
    payer_email: str
    source: str


@dataclass(frozen=True)
class TransferFailed:
    reference: str
    payer_email: str


@dataclass(frozen=True)
class UnrecognizedEvent:
    name: str


GatewayEvent = Union[FundsConfirmed, TransferFailed, UnrecognizedEvent]


def _require_str(container: Dict[str, Any], key: str, path: str) -> str:
    value = container.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Webhook field '{path}' is required", details={"field": path})
    return value.strip()


def _extract_reference_and_email(data: Dict[str, Any]) -> tuple:
    reference = _require_str(data, "reference", "data.reference")
    customer = data.get("customer")
    if not isinstance(customer, dict):
        raise ValidationError("Webhook field 'data.customer' is required", details={"field": "data.customer"})
    email = _require_str(customer, "email", "data.customer.email")
    return reference, email


def translate_event(payload: Any) -> GatewayEvent:
    """
    Translate a raw webhook body into an internal event.

    Args:
        payload: Parsed JSON body of the webhook request

    Returns:
        FundsConfirmed, TransferFailed or UnrecognizedEvent

    Raises:
        ValidationError: If the body or a recognized event's data is malformed
    """
    if not isinstance(payload, dict):
        raise ValidationError("Webhook body must be a JSON object")

    name = payload.get("event")
    if not isinstance(name, str) or not name:
        raise ValidationError("Webhook field 'event' is required", details={"field": "event"})

    if name not in FUNDS_CONFIRMED_EVENTS and name not in TRANSFER_FAILED_EVENTS:
        return UnrecognizedEvent(name=name)

    data = payload.get("data")
    if not isinstance(data, dict):
        raise ValidationError("Webhook field 'data' must be an object", details={"field": "data"})

    reference, email = _extract_reference_and_email(data)
    if name in FUNDS_CONFIRMED_EVENTS:
        return FundsConfirmed(reference=reference, payer_email=email, source=name)
    return TransferFailed(reference=reference, payer_email=email)
