"""Django admin configuration for files app."""

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.files.models import CourseFile, MaterialReport, StarredMaterial


def _format_bytes(size_bytes: int) -> str:
    """Format bytes in human-readable format.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Formatted size string (e.g., '1.5 MB', '234 KB').
    """
    if size_bytes < 1024:
        return f'{size_bytes} B'
    if size_bytes < 1024 * 1024:  # noqa: WPS531
        return f'{size_bytes / 1024:.1f} KB'
    return f'{size_bytes / (1024 * 1024):.1f} MB'


@admin.register(CourseFile)
class CourseFileAdmin(admin.ModelAdmin[CourseFile]):
    """Admin interface for CourseFile model.

    Records are read-only here; uploads and removals go through the API
    so storage stays in sync.
    """

    list_display = [
        'file_name',
        'course',
        'user',
        'size_display',
        'file_type',
        'uploaded_at',
    ]

    list_filter = [
        'file_type',
        'uploaded_at',
        'course',
    ]

    search_fields = [
        'file_name',
        'description',
    ]

    readonly_fields = [
        'id',
        'course',
        'user',
        'file_name',
        'file_size',
        'file_type',
        'file_url',
        'uploaded_at',
    ]

    fieldsets = (
        ('File Information', {
            'fields': ('id', 'file_name', 'course', 'user', 'description'),
        }),
        ('Metadata', {
            'fields': (
                'file_size',
                'file_type',
                'file_url',
            ),
        }),
        ('Timestamps', {
            'fields': ('uploaded_at',),
        }),
    )

    def size_display(self, obj: CourseFile) -> str:
        """Display file size in human-readable format.

        Args:
            obj: CourseFile instance.

        Returns:
            Formatted size string.
        """
        return _format_bytes(obj.file_size)
    size_display.short_description = 'Size'  # type: ignore[attr-defined]

    def has_add_permission(self, request: HttpRequest) -> bool:
        """Course files are only created by uploads."""
        return False

    def has_delete_permission(
        self,
        request: HttpRequest,
        obj: CourseFile | None = None,
    ) -> bool:
        """Course files are only removed through the removal workflow."""
        return False

    def get_queryset(self, request: HttpRequest) -> QuerySet[CourseFile]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('user', 'course')


@admin.register(MaterialReport)
class MaterialReportAdmin(admin.ModelAdmin[MaterialReport]):
    """Admin interface for MaterialReport model."""

    list_display = ['reason', 'material', 'reporter', 'status', 'created_at']
    list_filter = ['status', 'reason', 'created_at']
    readonly_fields = ['material', 'reporter', 'created_at', 'updated_at']


@admin.register(StarredMaterial)
class StarredMaterialAdmin(admin.ModelAdmin[StarredMaterial]):
    """Admin interface for StarredMaterial model."""

    list_display = ['student', 'file', 'starred_at']
    readonly_fields = ['starred_at']
