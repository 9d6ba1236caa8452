"""Django admin configuration for courses app."""

from django.contrib import admin

from server.apps.courses.models import Course


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin[Course]):
    """Admin interface for Course model."""

    list_display = ['code', 'name', 'created_at']
    search_fields = ['code', 'name']
    filter_horizontal = ['students']
