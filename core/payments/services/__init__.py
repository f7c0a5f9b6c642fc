"""
Payment Services Package

Business logic of the payment core, independent of the HTTP layer.

Services:
- gateway: Paystack API client (transaction initialize / verify)
- notifications: First-purchase welcome message dispatch
- entitlements: Idempotent course grant
- events: Translation of raw webhook payloads into internal events
- initiator: Purchase initiation
- reconciler: Webhook-driven ledger reconciliation
- reporting: Read-only ledger rollups
"""

from .gateway import GatewayInitialization, PaystackClient, get_gateway_client
from .events import FundsConfirmed, TransferFailed, UnrecognizedEvent, translate_event
from .initiator import PurchaseInitiator, PurchaseResult
from .reconciler import ReconciliationOutcome, WebhookReconciler
from .reporting import course_buyers, payment_stats

__all__ = [
    "GatewayInitialization",
    "PaystackClient",
    "get_gateway_client",
    "FundsConfirmed",
    "TransferFailed",
    "UnrecognizedEvent",
    "translate_event",
    "PurchaseInitiator",
    "PurchaseResult",
    "ReconciliationOutcome",
    "WebhookReconciler",
    "course_buyers",
    "payment_stats",
]
