"""Database models for notifications app."""

import uuid
from typing import ClassVar, Final, final, override

from django.conf import settings
from django.db import models

_TYPE_MAX_LENGTH: Final = 50
_TITLE_MAX_LENGTH: Final = 255
_LINK_MAX_LENGTH: Final = 255


class NotificationType(models.TextChoices):
    """Kinds of notification the portal sends."""

    FILE_UPLOAD = 'file_upload', 'File upload'


@final
class Notification(models.Model):
    """Inbox entry for a single recipient."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications',
        db_index=True,
    )

    type = models.CharField(  # noqa: WPS125
        max_length=_TYPE_MAX_LENGTH,
        choices=NotificationType.choices,
    )

    title = models.CharField(max_length=_TITLE_MAX_LENGTH)

    message = models.TextField()

    link = models.CharField(
        max_length=_LINK_MAX_LENGTH,
        blank=True,
        default='',
    )

    related_id = models.UUIDField(
        null=True,
        blank=True,
        help_text='ID of the record the notification is about',
    )

    is_read = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Notification'  # type: ignore[mutable-override]
        verbose_name_plural = 'Notifications'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-created_at']

        indexes: ClassVar[list[models.Index]] = [
            models.Index(
                fields=['user', 'is_read'],
                name='notifications_user_unread_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.user_id}: {self.title}'

    def to_dict(self) -> dict[str, object]:
        """Serialize the notification for API responses.

        Returns:
            JSON-compatible dictionary.
        """
        return {
            'id': str(self.id),
            'user_id': self.user_id,
            'type': self.type,
            'title': self.title,
            'message': self.message,
            'link': self.link,
            'related_id': str(self.related_id) if self.related_id else None,
            'is_read': self.is_read,
            'created_at': self.created_at.isoformat(),
        }
