"""Reconciliation of stored objects with course file records.

Best-effort deletes can leave objects in storage that no course file
record points at. These helpers find and purge such objects.

An upload saves its object before the record is committed, so objects
younger than the minimum age are never treated as orphans.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from django.conf import settings
from django.core.files.storage import Storage
from django.utils import timezone

from server.apps.files.infrastructure.metadata import storage_path_from_url
from server.apps.files.infrastructure.storage import iter_course_objects
from server.apps.files.models import CourseFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PurgeResult:
    """Outcome of an orphan purge run."""

    orphaned: list[str]
    purged: int
    failed: int


def default_min_age() -> timedelta:
    """Grace period before an unreferenced object counts as orphaned."""
    return timedelta(seconds=settings.PORTAL_ORPHAN_MIN_AGE_SECONDS)


def _referenced_paths() -> set[str]:
    records = CourseFile.objects.values_list('course_id', 'file_url')
    return {
        storage_path_from_url(course_code, file_url)
        for course_code, file_url in records.iterator()
    }


def _is_settled(storage: Storage, storage_path: str, cutoff: datetime) -> bool:
    try:
        modified_at = storage.get_modified_time(storage_path)
    except Exception:
        logger.exception('Cannot read modified time, skipping: %s', storage_path)
        return False
    return modified_at <= cutoff


def find_orphaned_objects(
    storage: Storage,
    *,
    min_age: timedelta | None = None,
) -> list[str]:
    """Find stored objects that no course file record references.

    Args:
        storage: Storage backend to scan.
        min_age: Only objects at least this old are reported. Defaults to
            ``PORTAL_ORPHAN_MIN_AGE_SECONDS``.

    Returns:
        Sorted storage paths of orphaned objects.
    """
    if min_age is None:
        min_age = default_min_age()
    # List objects before reading records: a record committed in between
    # must still cover its object
    stored_paths = list(iter_course_objects(storage))
    referenced = _referenced_paths()
    cutoff = timezone.now() - min_age

    orphaned = sorted(
        storage_path
        for storage_path in stored_paths
        if storage_path not in referenced
        and _is_settled(storage, storage_path, cutoff)
    )
    logger.info('Found %d orphaned objects in storage', len(orphaned))
    return orphaned


def purge_orphaned_objects(
    storage: Storage,
    *,
    dry_run: bool = False,
    min_age: timedelta | None = None,
) -> PurgeResult:
    """Delete stored objects that no course file record references.

    Failures are logged and counted; the run continues with the next
    object.

    Args:
        storage: Storage backend to clean.
        dry_run: Only report orphans without deleting them.
        min_age: Minimum object age, see ``find_orphaned_objects``.

    Returns:
        Orphans found and how many were purged or failed.
    """
    orphaned = find_orphaned_objects(storage, min_age=min_age)
    if dry_run:
        return PurgeResult(orphaned=orphaned, purged=0, failed=0)

    purged = 0
    failed = 0
    for storage_path in orphaned:
        try:
            storage.delete(storage_path)
        except Exception:
            logger.exception('Failed to purge orphaned object: %s', storage_path)
            failed += 1
        else:
            logger.info('Purged orphaned object: %s', storage_path)
            purged += 1

    return PurgeResult(orphaned=orphaned, purged=purged, failed=failed)
