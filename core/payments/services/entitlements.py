"""
Entitlement Store operations.

Granting is a set union: the (profile, course) pair is unique, and the
profile row is locked for the duration of the grant so that two purchases
settling at the same moment for one user are applied one after the other.
"""

import logging
from typing import Optional

from django.db import transaction

from academy.models import Course, CourseEnrollment, Profile

logger = logging.getLogger(__name__)


def grant_course(
    profile: Profile,
    course: Course,
    *,
    source: str = CourseEnrollment.Source.FUNDS_CONFIRMED,
    reference: Optional[str] = None,
) -> bool:
    """
    Idempotently add a course to a profile's entitlement set.

    Returns:
        True if the course was added, False if the profile already owned it.
    """
    with transaction.atomic():
        Profile.objects.select_for_update().filter(pk=profile.pk).first()
        _, created = CourseEnrollment.objects.get_or_create(
            profile=profile,
            course=course,
            defaults={"source": source, "reference": reference or ""},
        )

    if created:
        logger.info(
            "Enrolled user %s into course %s (source=%s, ref=%s).",
            profile.user_id,
            course.pk,
            source,
            reference,
        )
    else:
        logger.info(
            "Enrollment already exists for user %s and course %s.",
            profile.user_id,
            course.pk,
        )
    return created
