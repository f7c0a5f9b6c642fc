"""
Payments Management Package

Django management commands for operating the payment ledger.
"""
