"""Database models for courses app."""

from typing import ClassVar, Final, final, override

from django.conf import settings
from django.db import models

_COURSE_CODE_MAX_LENGTH: Final = 20
_COURSE_NAME_MAX_LENGTH: Final = 255


@final
class Course(models.Model):
    """University course that course materials are shared under.

    The course code (e.g. ``CS101``) is the public identifier used in
    URLs and as the top-level prefix of stored course files.
    """

    code = models.CharField(
        max_length=_COURSE_CODE_MAX_LENGTH,
        primary_key=True,
        help_text='Course code, e.g. CS101',
    )

    name = models.CharField(
        max_length=_COURSE_NAME_MAX_LENGTH,
    )

    # Enrolment
    students = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        related_name='courses',
        blank=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Course'  # type: ignore[mutable-override]
        verbose_name_plural = 'Courses'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['code']

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.code}: {self.name}'
