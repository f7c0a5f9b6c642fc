"""
Academy Users Views Package

Self-service views for the authenticated buyer.
"""

from .user_self_info import CurrentUserCoursesView
