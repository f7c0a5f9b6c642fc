"""
Payments Tests

Test-suite for the payment core: ledger transitions, event translation,
gateway client, purchase initiation, webhook reconciliation and reporting.
"""
