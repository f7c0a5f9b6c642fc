"""
Academy Course Models

This module defines the course catalogue entry that buyers pay for.

Models:
- Course: A sellable course (video series or book) with a price

Author: Course Payments Team
Version: 1.0.0
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

__all__ = ["Course"]


class Course(models.Model):
    """
    A sellable course.

    Attributes:
        title: Display title of the course
        description: Long description shown on the course page
        price: Tuition cost in the store currency
        category: Kind of product (video course or book)
        url: Location of the course material once purchased
        thumbnail: Image shown in listings
        status: Publication state

    Example:
        >>> course = Course.objects.create(title="Intro to Python", price="100.00")
        >>> course.is_published
        True
    """

    class Category(models.TextChoices):
        VIDEO = "video", _("Video")
        BOOK = "book", _("Book")

    class Status(models.TextChoices):
        DRAFTED = "drafted", _("Drafted")
        PUBLISHED = "published", _("Published")

    title = models.CharField(
        max_length=200,
        verbose_name=_("Course Title"),
        help_text=_("Title of the course"),
    )
    description = models.TextField(
        blank=True,
        verbose_name=_("Description"),
    )
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        verbose_name=_("Price"),
        help_text=_("Tuition cost in the store currency"),
    )
    category = models.CharField(
        max_length=10,
        choices=Category.choices,
        default=Category.VIDEO,
        verbose_name=_("Category"),
    )
    url = models.URLField(blank=True, verbose_name=_("Course URL"))
    thumbnail = models.CharField(
        max_length=255,
        default="no-photo.jpg",
        verbose_name=_("Thumbnail"),
    )
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.PUBLISHED,
        verbose_name=_("Status"),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Course")
        verbose_name_plural = _("Courses")
        ordering = ["title"]
        db_table = "academy_course"

    def __str__(self) -> str:
        return self.title

    @property
    def is_published(self) -> bool:
        return self.status == self.Status.PUBLISHED
