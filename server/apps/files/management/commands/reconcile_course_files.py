"""Management command to purge stored objects without a file record."""

import logging
from datetime import timedelta
from typing import Any

from django.core.management.base import BaseCommand

from server.apps.files.infrastructure.storage import get_storage
from server.apps.files.logic.storage_operations import purge_orphaned_objects

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Delete course file objects that no database record points at."""

    help = 'Purge orphaned course file objects from storage'

    def add_arguments(self, parser: Any) -> None:
        """Add command line arguments.

        Args:
            parser: Argument parser.
        """
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be deleted without deleting',
        )
        parser.add_argument(
            '--min-age',
            type=int,
            default=None,
            help=(
                'Only purge objects at least this many seconds old '
                '(default: PORTAL_ORPHAN_MIN_AGE_SECONDS)'
            ),
        )

    def handle(self, *args: Any, **options: Any) -> None:
        """Execute the reconcile command.

        Args:
            args: Positional arguments (unused).
            options: Command options.
        """
        dry_run = options['dry_run']
        min_age = None
        if options['min_age'] is not None:
            min_age = timedelta(seconds=options['min_age'])

        result = purge_orphaned_objects(
            get_storage(),
            dry_run=dry_run,
            min_age=min_age,
        )

        if dry_run:
            for storage_path in result.orphaned:
                self.stdout.write(f'Would delete: {storage_path}')
            self.stdout.write(
                self.style.SUCCESS(
                    f'Would purge {len(result.orphaned)} orphaned objects',
                ),
            )
            return

        logger.info(
            'Reconcile finished: %d purged, %d failed',
            result.purged,
            result.failed,
        )
        if result.failed:
            self.stderr.write(
                f'Failed to purge {result.failed} orphaned objects',
            )
        self.stdout.write(
            self.style.SUCCESS(
                f'Purged {result.purged} orphaned objects, '
                f'{result.failed} failed',
            ),
        )
