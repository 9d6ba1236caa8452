from django.urls import path

from server.apps.notifications import views

app_name = 'notifications'

urlpatterns = [
    path('', views.notification_list, name='list'),
    path('read-all', views.notification_read_all, name='read_all'),
    path(
        '<str:notification_id>/read',
        views.notification_read,
        name='read',
    ),
]
