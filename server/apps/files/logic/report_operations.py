"""Business logic for material report operations."""

import logging
from typing import Final
from uuid import UUID

from django.core.exceptions import ValidationError
from django.core.files.storage import Storage
from django.db import transaction
from django.db.models import QuerySet

from server.apps.files.exceptions import (
    BadRequestError,
    ForbiddenError,
    NotFoundError,
)
from server.apps.files.infrastructure.identity import (
    IdentityLookup,
    is_admin,
    lookup_identity,
    parse_requester_id,
)
from server.apps.files.logic.file_operations import remove_course_file
from server.apps.files.models import CourseFile, MaterialReport, ReportStatus

logger = logging.getLogger(__name__)

_RESOLUTION_ACTIONS: Final = frozenset((
    ReportStatus.REVIEWED,
    ReportStatus.DISMISSED,
))


def _require_admin(user_id: int, identity_lookup: IdentityLookup) -> None:
    if not is_admin(user_id, identity_lookup):
        logger.warning('Non-admin user %d denied report moderation', user_id)
        raise ForbiddenError('Admin access required')


def report_material(
    requester_id: int | str | None,
    material_id: UUID | str | None,
    reason: str | None,
    details: str | None = None,
) -> MaterialReport:
    """Report a course material for moderation.

    Each user can report a given material only once.

    Args:
        requester_id: Reporter's user id as supplied by the client.
        material_id: ID of the reported course file.
        reason: Report category (e.g. 'inappropriate', 'copyright').
        details: Optional additional information.

    Returns:
        Created pending MaterialReport.

    Raises:
        UnauthenticatedError: If the requester id is missing.
        BadRequestError: If parameters are missing or the report is a
            duplicate.
        NotFoundError: If the material does not exist.
    """
    user_id = parse_requester_id(requester_id)
    if not material_id or not reason:
        raise BadRequestError('Missing required parameters')

    try:
        material = CourseFile.objects.get(id=material_id)
    except (CourseFile.DoesNotExist, ValidationError) as error:
        raise NotFoundError('Material not found') from error

    already_reported = MaterialReport.objects.filter(
        material=material,
        reporter_id=user_id,
    ).exists()
    if already_reported:
        raise BadRequestError('You have already reported this material')

    report = MaterialReport.objects.create(
        material=material,
        reporter_id=user_id,
        reason=reason,
        details=details or None,
    )
    logger.info(
        'Material %s reported by user %d: %s',
        material.id,
        user_id,
        reason,
    )
    return report


def list_material_reports(
    requester_id: int | str | None,
    status: str | None = None,
    *,
    identity_lookup: IdentityLookup = lookup_identity,
) -> QuerySet[MaterialReport]:
    """List material reports for moderation, newest first.

    ``status='pending'`` lists open reports, ``status='reviewed'`` lists
    closed ones (reviewed and dismissed). Anything else lists all.

    Args:
        requester_id: Requester's user id as supplied by the client.
        status: Optional status filter.
        identity_lookup: Resolves the requester's admin flag.

    Returns:
        QuerySet of reports with their materials.

    Raises:
        UnauthenticatedError: If the requester id is missing.
        ForbiddenError: If the requester is not an admin.
    """
    user_id = parse_requester_id(requester_id)
    _require_admin(user_id, identity_lookup)

    reports = MaterialReport.objects.select_related('material', 'reporter')
    if status == ReportStatus.PENDING:
        reports = reports.filter(status=ReportStatus.PENDING)
    elif status == ReportStatus.REVIEWED:
        reports = reports.filter(
            status__in=[ReportStatus.REVIEWED, ReportStatus.DISMISSED],
        )
    return reports.order_by('-created_at')


def resolve_material_report(
    requester_id: int | str | None,
    report_id: UUID | str | None,
    action: str | None,
    *,
    storage: Storage,
    identity_lookup: IdentityLookup = lookup_identity,
) -> MaterialReport:
    """Close a material report.

    ``reviewed`` upholds the report and removes the material through the
    regular file removal workflow; ``dismissed`` only closes the report.

    Args:
        requester_id: Requester's user id as supplied by the client.
        report_id: Report to resolve.
        action: 'reviewed' or 'dismissed'.
        storage: Object store holding the reported material.
        identity_lookup: Resolves the requester's admin flag.

    Returns:
        Updated MaterialReport.

    Raises:
        UnauthenticatedError: If the requester id is missing.
        BadRequestError: If report_id or action is missing or invalid.
        ForbiddenError: If the requester is not an admin.
        NotFoundError: If the report does not exist.
        DeleteFailedError: If the material record cannot be deleted.
    """
    user_id = parse_requester_id(requester_id)
    _require_admin(user_id, identity_lookup)

    if not report_id or not action:
        raise BadRequestError('Missing required fields: reportId and action')
    if action not in _RESOLUTION_ACTIONS:
        raise BadRequestError(
            'Invalid action. Must be "reviewed" or "dismissed"',
        )

    try:
        report = MaterialReport.objects.select_related('material').get(
            id=report_id,
        )
    except (MaterialReport.DoesNotExist, ValidationError) as error:
        raise NotFoundError('Report not found') from error

    material = report.material
    if action == ReportStatus.REVIEWED and material is not None:
        remove_course_file(
            material.course_id,
            material.id,
            user_id,
            storage=storage,
            identity_lookup=identity_lookup,
        )
        report.material = None

    with transaction.atomic():
        report.status = action
        report.save(update_fields=['material', 'status', 'updated_at'])

    logger.info('Report %s resolved as %s by user %d', report.id, action, user_id)
    return report
