"""
Academy URL Configuration

URL Structure:
- /api/academy/token/: JWT token management
- /api/academy/users/: Buyer self-service endpoints

Author: Course Payments Team
Version: 1.0.0
"""

from typing import List

from django.urls import URLPattern, include, path
from rest_framework_simplejwt.views import (
    TokenObtainPairView,
    TokenRefreshView,
    TokenVerifyView,
)

from .users import views as user_views

app_name = "academy"

users_urlpatterns: List[URLPattern] = [
    path("me/courses/", user_views.CurrentUserCoursesView.as_view(), name="my-courses"),
]

urlpatterns: List[URLPattern] = [
    # Authentication endpoints (JWT token management)
    path("token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("token/verify/", TokenVerifyView.as_view(), name="token_verify"),
    path("users/", include((users_urlpatterns, "users"))),
]
