"""Student Hub portal settings."""

from server.settings.components import config

# Largest accepted course file upload (10 MiB)
PORTAL_MAX_UPLOAD_BYTES = config(
    'PORTAL_MAX_UPLOAD_BYTES',
    cast=int,
    default=10 * 1024 * 1024,
)

# Header carrying the requester's user id
PORTAL_REQUESTER_HEADER = config(
    'PORTAL_REQUESTER_HEADER',
    default='X-User-Id',
)

# Default page size of the notification inbox
PORTAL_NOTIFICATIONS_PAGE_SIZE = config(
    'PORTAL_NOTIFICATIONS_PAGE_SIZE',
    cast=int,
    default=50,
)

# Stored objects younger than this are never purged as orphans
PORTAL_ORPHAN_MIN_AGE_SECONDS = config(
    'PORTAL_ORPHAN_MIN_AGE_SECONDS',
    cast=int,
    default=60 * 60,
)
