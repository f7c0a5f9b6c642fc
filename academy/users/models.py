"""
Academy User Models

This module extends Django's built-in User with the buyer profile used by
the payment core, and defines the entitlement set of each buyer.

Models:
- Profile: Role, display name and first-purchase welcome state of a user
- CourseEnrollment: One owned course of a profile (the entitlement set)

Features:
- Automatic profile creation for new users
- Entitlements are unique per (profile, course) so repeated grants are no-ops
- The welcome state is claimed with a conditional update so that only one
  concurrent settlement may send the welcome message

Author: Course Payments Team
Version: 1.0.0
"""

from datetime import datetime
from typing import Optional

from django.conf import settings
from django.db import models
from django.db.models.signals import post_save
from django.dispatch import receiver
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

__all__ = ["Profile", "CourseEnrollment"]


class ProfileQuerySet(models.QuerySet):
    def claim_welcome(self, profile_id: int) -> Optional[datetime]:
        """
        Atomically flip the welcome flag of a profile from unset to set.

        Returns:
            The timestamp written when this caller won the claim, otherwise
            None (the profile was already welcomed or does not exist).
        """
        now = timezone.now()
        updated = self.filter(pk=profile_id, welcomed_at__isnull=True).update(
            welcomed_at=now
        )
        return now if updated == 1 else None

    def release_welcome(self, profile_id: int, claimed_at: datetime) -> bool:
        """
        Undo a claim made by :meth:`claim_welcome`.

        Only the exact claim is released, never a later one.
        """
        return (
            self.filter(pk=profile_id, welcomed_at=claimed_at).update(welcomed_at=None)
            == 1
        )


class Profile(models.Model):
    """
    Buyer profile for the course store.

    Attributes:
        user: One-to-one relationship with Django User model
        full_name: Name used in buyer-facing communication
        role: Store role; admins may read payment reports
        welcomed_at: When the first-purchase welcome was claimed, None if never
        courses: Owned courses through CourseEnrollment

    The profile is created automatically when a new user is registered.
    """

    class Role(models.TextChoices):
        USER = "user", _("User")
        ADMIN = "admin", _("Admin")
        SUPER_ADMIN = "super_admin", _("Super Admin")

    PRIVILEGED_ROLES = (Role.ADMIN, Role.SUPER_ADMIN)

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
        verbose_name=_("User"),
    )
    full_name = models.CharField(
        max_length=200,
        blank=True,
        verbose_name=_("Full Name"),
    )
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.USER,
        verbose_name=_("Role"),
    )
    welcomed_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_("Welcomed At"),
        help_text=_("Set once the first-purchase welcome message was sent"),
    )
    courses = models.ManyToManyField(
        "academy.Course",
        through="CourseEnrollment",
        related_name="owners",
        blank=True,
        verbose_name=_("Owned Courses"),
    )

    objects = ProfileQuerySet.as_manager()

    class Meta:
        verbose_name = _("User Profile")
        verbose_name_plural = _("User Profiles")
        db_table = "academy_profile"

    def __str__(self) -> str:
        return f"{self.user.username} Profile"

    def __repr__(self) -> str:
        return f"<Profile(user={self.user.username}, role={self.role}, welcomed={self.has_received_welcome})>"

    @property
    def display_name(self) -> str:
        if self.full_name:
            return self.full_name
        return self.user.get_full_name() or self.user.username

    @property
    def has_received_welcome(self) -> bool:
        return self.welcomed_at is not None

    @property
    def is_privileged(self) -> bool:
        return self.role in self.PRIVILEGED_ROLES

    def owns_course(self, course_id) -> bool:
        return self.enrollments.filter(course_id=course_id).exists()


class CourseEnrollment(models.Model):
    """
    Membership of one course in a profile's entitlement set.

    Attributes:
        profile: Owner of the entitlement
        course: Owned course
        source: What granted the entitlement
        reference: Gateway reference of the payment that granted it
        created_at: Grant time
    """

    class Source(models.TextChoices):
        FUNDS_CONFIRMED = "funds_confirmed", _("Funds Confirmed")
        ADMIN = "admin", _("Admin")

    profile = models.ForeignKey(
        Profile,
        on_delete=models.CASCADE,
        related_name="enrollments",
    )
    course = models.ForeignKey(
        "academy.Course",
        on_delete=models.CASCADE,
        related_name="enrollments",
    )
    source = models.CharField(
        max_length=20,
        choices=Source.choices,
        default=Source.FUNDS_CONFIRMED,
    )
    reference = models.CharField(max_length=100, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Course Enrollment")
        verbose_name_plural = _("Course Enrollments")
        db_table = "academy_course_enrollment"
        constraints = [
            models.UniqueConstraint(
                fields=["profile", "course"], name="unique_profile_course"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.profile.user.username} -> {self.course}"


# --- Signal Handlers for Automatic Profile Management ---


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def create_user_profile(sender, instance, created: bool, **kwargs) -> None:
    """
    Create the buyer profile for every new user.
    """
    if created:
        Profile.objects.get_or_create(
            user=instance,
            defaults={"full_name": instance.get_full_name()},
        )
