"""Business logic for course file operations."""

import logging
from dataclasses import dataclass
from typing import Any, Protocol
from uuid import UUID

from django.core.exceptions import ValidationError
from django.core.files.storage import Storage
from django.db import transaction

from server.apps.courses.models import Course
from server.apps.files.exceptions import (
    DeleteFailedError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    StorageWriteFailedError,
)
from server.apps.files.infrastructure.identity import (
    IdentityLookup,
    is_admin,
    lookup_identity,
    parse_requester_id,
)
from server.apps.files.infrastructure.metadata import (
    generate_storage_path,
    storage_path_from_url,
    validate_upload,
)
from server.apps.files.models import CourseFile
from server.apps.notifications.logic.notification_operations import (
    notify_course_upload,
)

logger = logging.getLogger(__name__)

_UNKNOWN_UPLOADER = 'Unknown User'


class UploadedContent(Protocol):
    """File-like upload as produced by Django's request parsing."""

    name: str | None
    size: int | None
    content_type: str | None

    def read(self, num_bytes: int = -1) -> bytes:
        """Read file content."""

    def seek(self, offset: int, whence: int = 0) -> int:
        """Move the read position."""


@dataclass(frozen=True, slots=True)
class CourseFileListing:
    """Course file together with uploader details."""

    course_file: CourseFile
    uploader_name: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize the listing entry for API responses.

        Returns:
            Course file fields plus ``user_info``.
        """
        payload = self.course_file.to_dict()
        payload['user_info'] = {'full_name': self.uploader_name}
        return payload


def _get_course(course_code: str) -> Course:
    try:
        return Course.objects.get(code=course_code)
    except Course.DoesNotExist as error:
        logger.warning('Course not found: %s', course_code)
        raise NotFoundError('Course not found') from error


def _upload_size(upload: UploadedContent) -> int:
    if upload.size is not None:
        return upload.size
    size = len(upload.read())
    upload.seek(0)  # Reset after reading for size
    return size


def _discard_stored_object(storage: Storage, storage_path: str) -> None:
    """Delete a stored object, logging instead of raising on failure.

    Args:
        storage: Storage backend holding the object.
        storage_path: Storage path of the object.
    """
    try:
        storage.delete(storage_path)
    except Exception:
        # Orphaned object is picked up by reconcile_course_files
        logger.exception('Failed to delete stored object: %s', storage_path)
    else:
        logger.info('Stored object deleted: %s', storage_path)


def ingest_course_file(
    course_code: str,
    requester_id: int | str | None,
    upload: UploadedContent,
    description: str | None = None,
    *,
    storage: Storage,
) -> CourseFile:
    """Upload a course file to storage and create its database record.

    Transaction safety: Upload to storage first, then create DB record.
    If the DB insert fails, the uploaded object is deleted from storage
    (rollback) and the insert error is reported.

    Enrolled students are notified once the record exists; notification
    failures never fail the upload.

    Args:
        course_code: Course the file is shared under.
        requester_id: Uploader's user id as supplied by the client.
        upload: Uploaded file with declared size and MIME type.
        description: Optional free-text description.
        storage: Object store to write to.

    Returns:
        Created CourseFile instance.

    Raises:
        UnauthenticatedError: If the requester id is missing.
        PayloadTooLargeError: If the upload exceeds the size limit.
        UnsupportedMediaTypeError: If the MIME type is not allowed.
        NotFoundError: If the course does not exist.
        StorageWriteFailedError: If the object store rejects the upload.
        InternalError: If the DB record cannot be created.
    """
    user_id = parse_requester_id(requester_id)

    file_name = upload.name or 'upload'
    file_size = _upload_size(upload)
    validate_upload(file_size, upload.content_type)

    course = _get_course(course_code)
    storage_path = generate_storage_path(course.code, user_id, file_name)

    # Step 1: Upload to storage first
    try:
        logger.info('Uploading course file to storage: %s', storage_path)
        saved_name = storage.save(storage_path, upload)
    except Exception as error:
        logger.exception('Failed to upload file to storage: %s', storage_path)
        raise StorageWriteFailedError(
            f'Failed to upload file: {error}',
        ) from error

    # Step 2: Create database record (in transaction)
    try:
        file_url = storage.url(saved_name)
        with transaction.atomic():
            course_file = CourseFile.objects.create(
                course=course,
                user_id=user_id,
                file_name=file_name,
                file_size=file_size,
                file_type=upload.content_type,
                file_url=file_url,
                description=description or None,
            )
    except Exception as error:
        # Rollback: Delete file from storage since DB insert failed
        logger.exception(
            'Database insert failed, rolling back storage upload: %s',
            saved_name,
        )
        _discard_stored_object(storage, saved_name)
        raise InternalError('Failed to save file metadata') from error

    logger.info(
        'Course file created: %s (ID: %s, course: %s)',
        saved_name,
        course_file.id,
        course.code,
    )

    # Step 3: Notify course members (best effort)
    try:
        notify_course_upload(course_file)
    except Exception:
        logger.exception(
            'Failed to create upload notifications for file %s',
            course_file.id,
        )

    return course_file


def remove_course_file(
    course_code: str,
    file_id: UUID | str,
    requester_id: int | str | None,
    *,
    storage: Storage,
    identity_lookup: IdentityLookup = lookup_identity,
) -> None:
    """Delete a course file from storage and database.

    Only the owner or an admin may delete a file. The stored object is
    deleted first on a best-effort basis; the record is deleted even if
    the storage delete fails.

    Args:
        course_code: Course the file belongs to.
        file_id: ID of file to delete.
        requester_id: Requester's user id as supplied by the client.
        storage: Object store holding the file.
        identity_lookup: Resolves the requester's admin flag.

    Raises:
        UnauthenticatedError: If the requester id is missing.
        NotFoundError: If the file does not exist in the course.
        ForbiddenError: If the requester is neither owner nor admin.
        DeleteFailedError: If the DB record cannot be deleted.
    """
    user_id = parse_requester_id(requester_id)

    try:
        course_file = CourseFile.objects.get(id=file_id, course_id=course_code)
    except (CourseFile.DoesNotExist, ValidationError) as error:
        logger.warning('File not found: ID=%s, course=%s', file_id, course_code)
        raise NotFoundError('File not found') from error

    is_owner = course_file.user_id == user_id
    if not is_owner and not is_admin(user_id, identity_lookup):
        logger.warning(
            'User %d denied deleting file %s owned by %d',
            user_id,
            course_file.id,
            course_file.user_id,
        )
        raise ForbiddenError('You do not have permission to delete this file')

    storage_path = storage_path_from_url(course_code, course_file.file_url)
    logger.info(
        'Deleting course file: ID=%s, path=%s',
        course_file.id,
        storage_path,
    )

    # Step 1: Delete from storage (best effort)
    _discard_stored_object(storage, storage_path)

    # Step 2: Delete from database
    try:
        with transaction.atomic():
            course_file.delete()
    except Exception as error:
        logger.exception('Failed to delete file record: ID=%s', file_id)
        raise DeleteFailedError from error

    logger.info('File record deleted from database: ID=%s', file_id)


def list_course_files(
    course_code: str,
    requester_id: int | str | None,
) -> list[CourseFileListing]:
    """List a course's files, newest first, with uploader names.

    Args:
        course_code: Course to list.
        requester_id: Requester's user id as supplied by the client.

    Returns:
        Listing entries for every file of the course.

    Raises:
        UnauthenticatedError: If the requester id is missing.
        NotFoundError: If the course does not exist.
    """
    parse_requester_id(requester_id)
    course = _get_course(course_code)

    course_files = (
        CourseFile.objects
        .filter(course=course)
        .select_related('user')
        .order_by('-uploaded_at')
    )
    return [
        CourseFileListing(
            course_file=course_file,
            uploader_name=course_file.user.get_full_name() or _UNKNOWN_UPLOADER,
        )
        for course_file in course_files
    ]
