"""Database models for files app."""

import uuid
from typing import ClassVar, Final, final, override

from django.conf import settings
from django.db import models

from server.apps.courses.models import Course

# Constants for field max lengths
_FILE_NAME_MAX_LENGTH: Final = 255
_MIME_TYPE_MAX_LENGTH: Final = 255
_FILE_URL_MAX_LENGTH: Final = 1024
_REASON_MAX_LENGTH: Final = 50
_STATUS_MAX_LENGTH: Final = 20


@final
class CourseFile(models.Model):
    """Course material stored in S3-compatible storage.

    Each record points at exactly one stored object through ``file_url``.
    The object lives at ``{course_code}/{unique_name}`` where the unique
    name is the last path segment of the URL.

    Records are immutable once created: they are only inserted by the
    upload workflow and deleted by the removal workflow.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name='files',
        db_index=True,
    )

    # Owner relationship
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='course_files',
        db_index=True,
    )

    file_name = models.CharField(
        max_length=_FILE_NAME_MAX_LENGTH,
        help_text='Original filename as uploaded',
    )

    file_size = models.BigIntegerField(
        help_text='File size in bytes',
    )

    file_type = models.CharField(
        max_length=_MIME_TYPE_MAX_LENGTH,
        help_text='Declared MIME type',
    )

    file_url = models.URLField(
        max_length=_FILE_URL_MAX_LENGTH,
        help_text='Public URL of the stored object',
    )

    description = models.TextField(
        null=True,
        blank=True,
    )

    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Course file'  # type: ignore[mutable-override]
        verbose_name_plural = 'Course files'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-uploaded_at']

        indexes: ClassVar[list[models.Index]] = [
            # Course page listing, newest first
            models.Index(
                fields=['course', '-uploaded_at'],
                name='files_course_recent_idx',
            ),
        ]

        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.CheckConstraint(
                condition=models.Q(file_size__gt=0),
                name='files_file_size_positive',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.course_id}:{self.file_name}'

    def to_dict(self) -> dict[str, object]:
        """Serialize the record for API responses.

        Returns:
            JSON-compatible dictionary.
        """
        return {
            'id': str(self.id),
            'course_code': self.course_id,
            'user_id': self.user_id,
            'file_name': self.file_name,
            'file_size': self.file_size,
            'file_type': self.file_type,
            'file_url': self.file_url,
            'description': self.description,
            'uploaded_at': self.uploaded_at.isoformat(),
        }


class ReportStatus(models.TextChoices):
    """Moderation state of a material report."""

    PENDING = 'pending', 'Pending'
    REVIEWED = 'reviewed', 'Reviewed'
    DISMISSED = 'dismissed', 'Dismissed'


@final
class MaterialReport(models.Model):
    """Report of an inappropriate or problematic course material.

    A reporter can report a given material only once. Reports outlive the
    material they point at so moderation history is kept after removal.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )

    material = models.ForeignKey(
        CourseFile,
        on_delete=models.SET_NULL,
        null=True,
        related_name='reports',
    )

    reporter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='material_reports',
    )

    reason = models.CharField(max_length=_REASON_MAX_LENGTH)

    details = models.TextField(null=True, blank=True)

    status = models.CharField(
        max_length=_STATUS_MAX_LENGTH,
        choices=ReportStatus.choices,
        default=ReportStatus.PENDING,
        db_index=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Material report'  # type: ignore[mutable-override]
        verbose_name_plural = 'Material reports'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-created_at']

        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.UniqueConstraint(
                fields=['material', 'reporter'],
                name='reports_material_reporter_unique',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.reason} ({self.status})'

    def to_dict(self) -> dict[str, object]:
        """Serialize the report for API responses.

        Returns:
            JSON-compatible dictionary including material summary.
        """
        material = self.material
        return {
            'id': str(self.id),
            'material_id': str(self.material_id) if self.material_id else None,
            'reporter_id': self.reporter_id,
            'reason': self.reason,
            'details': self.details,
            'status': self.status,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
            'material': material.to_dict() if material else None,
        }


@final
class StarredMaterial(models.Model):
    """Course material bookmarked by a student."""

    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='starred_materials',
    )

    file = models.ForeignKey(
        CourseFile,
        on_delete=models.CASCADE,
        related_name='stars',
    )

    starred_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Starred material'  # type: ignore[mutable-override]
        verbose_name_plural = 'Starred materials'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-starred_at']

        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.UniqueConstraint(
                fields=['student', 'file'],
                name='stars_student_file_unique',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.student_id}*{self.file_id}'
