"""
Academy Django Admin Configuration

Admin configuration for courses, buyer profiles and enrollments.

Features:
- User admin with inline buyer profile
- Course catalogue administration
- Read-mostly view on enrollments (entitlements are granted by payments)

Author: Course Payments Team
Version: 1.0.0
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.models import User
from django.utils.translation import gettext_lazy as _

from .models import Course, CourseEnrollment, Profile

# --- User Management Administration ---


class ProfileInline(admin.StackedInline):
    """
    Inline admin configuration for buyer profiles.
    """

    model = Profile
    can_delete = False
    verbose_name_plural = _("Profile")
    fields = ("full_name", "role", "welcomed_at")
    readonly_fields = ("welcomed_at",)


class UserAdmin(BaseUserAdmin):
    inlines = (ProfileInline,)
    list_display = ("username", "email", "first_name", "last_name", "is_staff", "get_role")

    @admin.display(description=_("Role"))
    def get_role(self, obj: User) -> str:
        profile = getattr(obj, "profile", None)
        return profile.get_role_display() if profile else "-"


admin.site.unregister(User)
admin.site.register(User, UserAdmin)

# --- Course Administration ---


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ("title", "category", "price", "status", "created_at")
    list_filter = ("category", "status")
    search_fields = ("title", "description")


@admin.register(CourseEnrollment)
class CourseEnrollmentAdmin(admin.ModelAdmin):
    list_display = ("profile", "course", "source", "reference", "created_at")
    list_filter = ("source",)
    search_fields = ("profile__user__email", "reference", "course__title")
    readonly_fields = ("created_at",)
