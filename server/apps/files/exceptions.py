"""Exceptions for files app.

Every error a portal operation can surface derives from ``PortalError``
and carries the HTTP status and message it is reported with.
"""

from collections.abc import Sequence
from typing import ClassVar


class PortalError(Exception):
    """Base class for errors reported to API clients."""

    status_code: ClassVar[int] = 500
    default_message: ClassVar[str] = 'Internal server error'

    def __init__(self, message: str | None = None) -> None:
        """Initialize PortalError.

        Args:
            message: Human-readable message, class default when omitted.
        """
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(PortalError):
    """Raised when request input is missing or malformed."""

    status_code = 400
    default_message = 'Bad request'


class UnauthenticatedError(PortalError):
    """Raised when the requester identity is absent."""

    status_code = 401
    default_message = 'User ID is required'


class ForbiddenError(PortalError):
    """Raised when the requester is neither the owner nor an admin."""

    status_code = 403
    default_message = 'You do not have permission to perform this action'


class NotFoundError(PortalError):
    """Raised when a course, file or other record does not exist."""

    status_code = 404
    default_message = 'Not found'


class MethodNotAllowedError(PortalError):
    """Raised when an endpoint does not support the request method."""

    status_code = 405
    default_message = 'Method not allowed'

    def __init__(self, allowed_methods: Sequence[str]) -> None:
        """Initialize MethodNotAllowedError.

        Args:
            allowed_methods: Methods the endpoint accepts.
        """
        self.allowed_methods = tuple(allowed_methods)
        super().__init__()


class PayloadTooLargeError(BadRequestError):
    """Raised when an upload exceeds the size limit."""

    def __init__(self, size_bytes: int, limit_bytes: int) -> None:
        """Initialize PayloadTooLargeError.

        Args:
            size_bytes: Size of the rejected upload.
            limit_bytes: Largest accepted upload.
        """
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        limit_mib = limit_bytes // (1024 * 1024)
        super().__init__(f'File size exceeds {limit_mib}MB limit')


class UnsupportedMediaTypeError(BadRequestError):
    """Raised when an upload's MIME type is not allowed."""

    def __init__(self, mime_type: str) -> None:
        """Initialize UnsupportedMediaTypeError.

        Args:
            mime_type: Declared MIME type of the rejected upload.
        """
        self.mime_type = mime_type
        super().__init__('Invalid file type')


class StorageWriteFailedError(PortalError):
    """Raised when the object store rejects an upload."""

    default_message = 'Failed to upload file'


class DeleteFailedError(PortalError):
    """Raised when a file record cannot be deleted."""

    default_message = 'Failed to delete file record'


class InternalError(PortalError):
    """Raised for unexpected failures."""


class IdentityLookupError(Exception):
    """Raised when a user id does not resolve to a known user."""
