"""Django app configuration for courses app."""

from django.apps import AppConfig


class CoursesConfig(AppConfig):
    """Configuration for courses app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.courses'
    verbose_name = 'Courses'
