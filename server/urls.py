"""Main URL mapping configuration file.

Include other URLConfs from external apps using method `include()`.
"""

from django.contrib import admin
from django.urls import include, path

from server.apps.files import urls as files_urls
from server.apps.notifications import urls as notifications_urls

admin.autodiscover()

urlpatterns = [
    # Apps:
    path('api/', include(files_urls, namespace='files')),
    path(
        'api/notifications/',
        include(notifications_urls, namespace='notifications'),
    ),

    # django-admin:
    path('admin/', admin.site.urls),
]
