"""
Academy Package - Course Payments Platform

This package contains the learner-facing side of the course store:
the course catalogue models and the user profile that owns course
entitlements.

Structure:
- courses/: Course catalogue models (read-only from the payment core)
- users/: Profiles, course enrollments and the self-service views
- management/: Django management commands

Author: Course Payments Team
Version: 1.0.0
"""
