"""Custom storage backend for S3-compatible storage."""

import logging
from collections.abc import Iterator
from typing import Any, final, override

from django.core.files.storage import Storage, default_storage
from storages.backends.s3 import S3Storage

logger = logging.getLogger(__name__)


def get_storage() -> Storage:
    """Get the configured default storage backend.

    Workflows take the storage as a parameter; this is the production
    value passed in by views and management commands.

    Returns:
        FileStorage instance with proper S3 configuration.
    """
    return default_storage  # type: ignore[return-value]


def iter_course_objects(storage: Storage) -> Iterator[str]:
    """Yield every stored object path under a course prefix.

    Course files are laid out one level deep (``{course_code}/{name}``),
    so only the first directory level is walked.

    Args:
        storage: Storage backend to list.

    Yields:
        Storage paths such as 'CS101/7-1700000000000-ab.pdf'.
    """
    course_dirs, _ = storage.listdir('')
    for course_code in course_dirs:
        _, names = storage.listdir(course_code)
        for name in names:
            yield f'{course_code}/{name}'


@final
class FileStorage(S3Storage):
    """S3 storage backend for course files.

    Extends django-storages S3Storage with workflow logging around
    uploads and deletions.
    """

    @override
    def save(  # noqa: WPS211
        self,
        name: str,
        content: Any,
        max_length: int | None = None,
    ) -> str:
        """Save file to S3 with error handling and logging.

        Args:
            name: Storage path for the file.
            content: File content (file-like object).
            max_length: Optional maximum length for the filename.

        Returns:
            Actual storage path used (may differ from name if conflicts).

        Raises:
            Exception: If S3 upload fails.
        """
        try:
            logger.info('Uploading file to storage: %s', name)
            saved_name = super().save(name, content, max_length)
        except Exception:
            logger.exception('Failed to upload file to storage: %s', name)
            raise
        else:
            logger.info('Successfully uploaded file: %s', saved_name)
            return saved_name

    @override
    def delete(self, name: str) -> None:
        """Delete file from S3 with error handling and logging.

        Args:
            name: Storage path of file to delete.

        Raises:
            Exception: If S3 delete fails.
        """
        try:
            logger.info('Deleting file from storage: %s', name)
            super().delete(name)
        except Exception:
            logger.exception('Failed to delete file from storage: %s', name)
            raise
        logger.info('Successfully deleted file: %s', name)
