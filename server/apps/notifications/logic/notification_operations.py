"""Business logic for notification inbox operations."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

from django.core.exceptions import ValidationError
from django.db.models import QuerySet

from server.apps.files.exceptions import (
    BadRequestError,
    ForbiddenError,
    NotFoundError,
)
from server.apps.notifications.models import Notification, NotificationType

if TYPE_CHECKING:
    from server.apps.files.models import CourseFile

logger = logging.getLogger(__name__)

_FALLBACK_UPLOADER_NAME = 'A student'


@dataclass(frozen=True, slots=True)
class NotificationPage:
    """One page of a user's inbox."""

    notifications: list[Notification]
    unread_count: int


def notify_course_upload(course_file: 'CourseFile') -> int:
    """Notify enrolled students about a new course file.

    The uploader is not notified about their own upload.

    Args:
        course_file: Newly created course file.

    Returns:
        Number of notifications created.
    """
    course = course_file.course
    uploader = course_file.user
    uploader_name = uploader.get_full_name() or _FALLBACK_UPLOADER_NAME

    recipients = course.students.exclude(pk=uploader.pk).values_list(
        'pk',
        flat=True,
    )
    notifications = [
        Notification(
            user_id=recipient_id,
            type=NotificationType.FILE_UPLOAD,
            title=f'New file in {course.code}',
            message=(
                f'{uploader_name} uploaded "{course_file.file_name}" '
                f'to {course.name}'
            ),
            link=f'/courses/{course.code}',
            related_id=course_file.id,
        )
        for recipient_id in recipients
    ]
    if not notifications:
        return 0

    Notification.objects.bulk_create(notifications)
    logger.info(
        'Created %d upload notifications for course %s',
        len(notifications),
        course.code,
    )
    return len(notifications)


def list_notifications(
    user_id: int,
    limit: int,
    offset: int = 0,
) -> NotificationPage:
    """List a user's notifications, newest first.

    Args:
        user_id: Recipient's user id.
        limit: Page size.
        offset: Number of notifications to skip.

    Returns:
        Requested page and the user's total unread count.

    Raises:
        BadRequestError: If limit or offset is negative.
    """
    if limit < 0 or offset < 0:
        raise BadRequestError('limit and offset must not be negative')

    inbox: QuerySet[Notification] = Notification.objects.filter(
        user_id=user_id,
    )
    page = list(inbox.order_by('-created_at')[offset:offset + limit])
    unread_count = inbox.filter(is_read=False).count()

    logger.debug(
        'Found %d notifications for user %d, %d unread',
        len(page),
        user_id,
        unread_count,
    )
    return NotificationPage(notifications=page, unread_count=unread_count)


def mark_notification_read(
    user_id: int,
    notification_id: UUID | str,
) -> Notification:
    """Mark one of the user's notifications as read.

    Args:
        user_id: Requester's user id.
        notification_id: Notification to mark.

    Returns:
        Updated notification.

    Raises:
        NotFoundError: If the notification does not exist or the id is
            malformed.
        ForbiddenError: If it belongs to another user.
    """
    try:
        notification = Notification.objects.get(id=notification_id)
    except (Notification.DoesNotExist, ValidationError) as error:
        raise NotFoundError('Notification not found') from error

    if notification.user_id != user_id:
        logger.warning(
            'User %d tried to read notification %s of user %d',
            user_id,
            notification_id,
            notification.user_id,
        )
        raise ForbiddenError('Unauthorized access to notification')

    if not notification.is_read:
        notification.is_read = True
        notification.save(update_fields=['is_read'])
    return notification


def mark_all_notifications_read(user_id: int) -> int:
    """Mark every unread notification of the user as read.

    Args:
        user_id: Requester's user id.

    Returns:
        Number of notifications updated.
    """
    updated = Notification.objects.filter(
        user_id=user_id,
        is_read=False,
    ).update(is_read=True)
    logger.info('Marked %d notifications read for user %d', updated, user_id)
    return updated
