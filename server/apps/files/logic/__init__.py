"""Business logic layer for files app.

This package contains all business logic for course materials:
- Course file upload, removal and listing
- Material reports and their moderation
- Starred materials
- Reconciliation of stored objects with file records

All business logic should be implemented here, separate from
models (data layer) and infrastructure (external systems).
"""
