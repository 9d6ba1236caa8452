"""Metadata and storage path utilities for course files."""

import uuid
from datetime import UTC, datetime
from pathlib import PurePosixPath
from typing import Final
from urllib.parse import unquote, urlsplit

from django.conf import settings

from server.apps.files.exceptions import (
    BadRequestError,
    PayloadTooLargeError,
    UnsupportedMediaTypeError,
)

ALLOWED_MIME_TYPES: Final = frozenset((
    # Documents
    'application/pdf',
    'application/msword',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'application/vnd.ms-excel',
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    'application/vnd.ms-powerpoint',
    'application/vnd.openxmlformats-officedocument.presentationml.presentation',
    'text/plain',
    # Images
    'image/jpeg',
    'image/png',
    'image/gif',
    # Archives
    'application/zip',
    'application/x-rar-compressed',
))


def max_upload_bytes() -> int:
    """Largest accepted upload in bytes."""
    return settings.PORTAL_MAX_UPLOAD_BYTES


def validate_upload(size_bytes: int, mime_type: str | None) -> None:
    """Validate upload size and declared MIME type.

    Runs before anything touches the object store.

    Args:
        size_bytes: Payload size in bytes.
        mime_type: Declared MIME type, may be missing.

    Raises:
        BadRequestError: If the payload is empty.
        PayloadTooLargeError: If the payload exceeds the upload limit.
        UnsupportedMediaTypeError: If the MIME type is not allowed.
    """
    if size_bytes <= 0:
        raise BadRequestError('File is empty')

    limit = max_upload_bytes()
    if size_bytes > limit:
        raise PayloadTooLargeError(size_bytes, limit)

    if mime_type not in ALLOWED_MIME_TYPES:
        raise UnsupportedMediaTypeError(mime_type or '')


def get_file_extension(filename: str) -> str:
    """Get file extension from filename.

    Args:
        filename: Filename (e.g., 'lecture.pdf').

    Returns:
        Extension with leading dot, lowercase (e.g., '.pdf').
        Returns empty string if no extension.
    """
    return PurePosixPath(filename).suffix.lower()


def generate_storage_path(course_code: str, user_id: int, filename: str) -> str:
    """Build a unique storage path for a course file.

    Format: ``{course_code}/{user_id}-{millis}-{random}{.ext}``. The random
    component keeps two uploads in the same millisecond apart.

    Args:
        course_code: Owning course code.
        user_id: Uploader's user ID.
        filename: Original filename, only its extension is kept.

    Returns:
        Storage path relative to the bucket root.
    """
    millis = int(datetime.now(tz=UTC).timestamp() * 1000)
    unique_name = '{user_id}-{millis}-{random}{extension}'.format(
        user_id=user_id,
        millis=millis,
        random=uuid.uuid4().hex,
        extension=get_file_extension(filename),
    )
    return f'{course_code}/{unique_name}'


def storage_path_from_url(course_code: str, file_url: str) -> str:
    """Derive the storage path of a course file from its public URL.

    Example: 'https://cdn/course-files/CS101/7-1700000000000-ab.pdf'
    -> 'CS101/7-1700000000000-ab.pdf'

    Args:
        course_code: Owning course code.
        file_url: Public URL recorded for the file.

    Returns:
        Storage path relative to the bucket root.
    """
    url_path = urlsplit(file_url).path
    object_name = unquote(url_path.rstrip('/').rsplit('/', 1)[-1])
    return f'{course_code}/{object_name}'
