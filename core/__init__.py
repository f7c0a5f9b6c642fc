"""
Core Package - Course Payments Platform

Shared, product-independent functionality. Currently houses the payment
core (`core.payments`).
"""
