"""Business logic for starred materials."""

import logging
from enum import StrEnum
from uuid import UUID

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db.models import QuerySet

from server.apps.files.exceptions import ForbiddenError, NotFoundError
from server.apps.files.infrastructure.identity import (
    IdentityLookup,
    is_admin,
    lookup_identity,
    parse_requester_id,
)
from server.apps.files.models import CourseFile, StarredMaterial

logger = logging.getLogger(__name__)


class StarState(StrEnum):
    """Outcome of toggling a star."""

    STARRED = 'starred'
    UNSTARRED = 'unstarred'


def toggle_starred_material(
    requester_id: int | str | None,
    student_id: int,
    file_id: UUID | str,
) -> StarState:
    """Star a material for a student, or unstar it if already starred.

    Students can only manage their own stars.

    Args:
        requester_id: Requester's user id as supplied by the client.
        student_id: Student whose stars are changed.
        file_id: Course file to toggle.

    Returns:
        New star state of the material.

    Raises:
        UnauthenticatedError: If the requester id is missing.
        ForbiddenError: If the requester is not the student.
        NotFoundError: If the student or the file does not exist.
    """
    user_id = parse_requester_id(requester_id)
    if user_id != student_id:
        raise ForbiddenError('Cannot star materials for another student')

    try:
        deleted, _ = StarredMaterial.objects.filter(
            student_id=student_id,
            file_id=file_id,
        ).delete()
    except ValidationError as error:
        raise NotFoundError('File not found') from error
    if deleted:
        logger.info('User %d unstarred file %s', student_id, file_id)
        return StarState.UNSTARRED

    if not get_user_model().objects.filter(pk=student_id).exists():
        raise NotFoundError('Student not found')
    try:
        course_file = CourseFile.objects.get(id=file_id)
    except (CourseFile.DoesNotExist, ValidationError) as error:
        raise NotFoundError('File not found') from error

    StarredMaterial.objects.create(student_id=student_id, file=course_file)
    logger.info('User %d starred file %s', student_id, file_id)
    return StarState.STARRED


def list_starred_materials(
    requester_id: int | str | None,
    student_id: int,
    *,
    identity_lookup: IdentityLookup = lookup_identity,
) -> QuerySet[StarredMaterial]:
    """List a student's starred materials, newest first.

    Args:
        requester_id: Requester's user id as supplied by the client.
        student_id: Student whose stars are listed.
        identity_lookup: Resolves the requester's admin flag.

    Returns:
        QuerySet of stars with their course files.

    Raises:
        UnauthenticatedError: If the requester id is missing.
        ForbiddenError: If the requester is neither the student nor admin.
    """
    user_id = parse_requester_id(requester_id)
    if user_id != student_id and not is_admin(user_id, identity_lookup):
        raise ForbiddenError('Forbidden')

    return (
        StarredMaterial.objects
        .filter(student_id=student_id)
        .select_related('file')
        .order_by('-starred_at')
    )
