"""
Academy Users Package

Buyer profiles and the entitlement set (owned courses) of every user.

Structure:
- models.py: Profile, CourseEnrollment and the profile signal handlers
- serializers.py: API serialization of profiles and owned courses
- views/: Self-service views for the authenticated user

Author: Course Payments Team
Version: 1.0.0
"""
