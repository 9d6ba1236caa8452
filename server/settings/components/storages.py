"""Django storage configuration for the course files bucket.

Course files live in an S3-compatible bucket (MinIO locally, any
S3-compatible service in production). Objects are addressed by plain
public URLs, so query-string signing is disabled.
"""

from typing import Any, Final

from server.settings.components import config

# Storage configuration dictionary
# Uses S3-compatible storage for course files, local storage for static files
STORAGES: Final[dict[str, dict[str, Any]]] = {
    'default': {
        'BACKEND': 'server.apps.files.infrastructure.storage.FileStorage',
        'OPTIONS': {
            'bucket_name': config(
                'AWS_STORAGE_BUCKET_NAME',
                default='course-files',
            ),
            'access_key': config('AWS_ACCESS_KEY_ID', default='minioadmin'),
            'secret_key': config(
                'AWS_SECRET_ACCESS_KEY',
                default='minioadmin',
            ),
            'endpoint_url': config(
                'AWS_S3_ENDPOINT_URL',
                default=None,
            ),
            'region_name': config(
                'AWS_S3_REGION_NAME',
                default='us-east-1',
            ),
            'file_overwrite': False,  # Prevent accidental overwrites
            'default_acl': None,  # Inherit bucket ACL
            'querystring_auth': False,  # Stored URLs must stay resolvable
            'object_parameters': {
                'CacheControl': 'max-age=3600',
            },
        },
    },
    'staticfiles': {
        # Keep static files separate from course files
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}
