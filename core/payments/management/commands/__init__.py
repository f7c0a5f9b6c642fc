"""
Payments Management Commands

- verify_pending_payments: Reconcile stale pending payments via the gateway
"""
