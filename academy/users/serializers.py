"""
Academy User Serializers

Serializers:
- OwnedCourseSerializer: One course of the entitlement set
- ProfileCoursesSerializer: A user with owned courses and welcome state
"""

from django.contrib.auth.models import User
from rest_framework import serializers

from academy.courses.models import Course

from .models import Profile


class OwnedCourseSerializer(serializers.ModelSerializer):
    class Meta:
        model = Course
        fields = ("id", "title", "category", "url", "thumbnail", "price")
        read_only_fields = fields


class ProfileCoursesSerializer(serializers.ModelSerializer):
    """
    The authenticated user together with their entitlement set.
    """

    full_name = serializers.SerializerMethodField()
    role = serializers.SerializerMethodField()
    has_received_welcome = serializers.SerializerMethodField()
    purchased_courses = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = (
            "id",
            "username",
            "email",
            "full_name",
            "role",
            "has_received_welcome",
            "purchased_courses",
        )
        read_only_fields = fields

    def _profile(self, obj: User) -> Profile:
        profile, _ = Profile.objects.get_or_create(user=obj)
        return profile

    def get_full_name(self, obj: User) -> str:
        return self._profile(obj).display_name

    def get_role(self, obj: User) -> str:
        return self._profile(obj).role

    def get_has_received_welcome(self, obj: User) -> bool:
        return self._profile(obj).has_received_welcome

    def get_purchased_courses(self, obj: User):
        courses = self._profile(obj).courses.order_by("title")
        return OwnedCourseSerializer(courses, many=True).data
