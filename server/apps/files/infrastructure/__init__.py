"""Infrastructure layer for files app.

This package contains integrations with external systems:
- Custom storage backend (S3/MinIO)
- Upload validation and storage path handling
- Requester identity lookup

Keep infrastructure concerns separate from business logic.
"""
