"""
Payments Package - Course Payments Platform
===========================================

This package centralizes all payment logic of the course store: the
ledger of purchase attempts, the Paystack gateway client and the webhook
reconciliation that turns gateway events into course entitlements.

Current Scope
-------------
- Purchase initiation: create a pending ledger entry after the gateway
  issued a transaction reference.
- Webhook reconciliation: `charge.success` and `transfer.success` are both
  translated to one internal "funds confirmed" event that settles the
  ledger entry, grants the course and sends the first-purchase welcome.
  `transfer.failed` purges the purchase attempt (and, by default, the
  buyer account).
- Reporting: per-course buyer lists and global payment totals.

Delivery Guarantees
-------------------
Paystack delivers webhooks at least once and in no particular order.
Every effect of the reconciler is idempotent: the status transition is a
conditional update, enrollment is unique per (user, course), and the
welcome message is guarded by an atomic claim on the profile.

Structure
---------
- apps.py         → App configuration (`PaymentsConfig`)
- models.py       → `PaymentRecord` ledger and its conditional transitions
- exceptions.py   → Error taxonomy and the DRF exception handler
- services/       → Gateway client, notifications, initiator, reconciler, reporting
- serializers.py  → Request validation and ledger serialization
- permissions.py  → Privileged-role permission for reports
- views.py        → API endpoints
- urls.py         → Routes for payment endpoints

Author: Course Payments Team
Date: 2026-10-19
"""
