"""HTTP endpoints for the notification inbox."""


from django.conf import settings
from django.http import HttpRequest, JsonResponse

from server.apps.files.http import (
    allow_methods,
    json_api,
    query_int,
    requester_id,
)
from server.apps.files.infrastructure.identity import parse_requester_id
from server.apps.notifications.logic.notification_operations import (
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)


@json_api
@allow_methods('GET')
def notification_list(request: HttpRequest) -> JsonResponse:
    """List the requester's notifications."""
    user_id = parse_requester_id(requester_id(request))
    page = list_notifications(
        user_id,
        limit=query_int(
            request,
            'limit',
            settings.PORTAL_NOTIFICATIONS_PAGE_SIZE,
        ),
        offset=query_int(request, 'offset', 0),
    )
    return JsonResponse({
        'notifications': [
            notification.to_dict() for notification in page.notifications
        ],
        'unreadCount': page.unread_count,
        'total': len(page.notifications),
    })


@json_api
@allow_methods('PUT')
def notification_read(request: HttpRequest, notification_id: str) -> JsonResponse:
    """Mark one notification as read."""
    user_id = parse_requester_id(requester_id(request))
    notification = mark_notification_read(user_id, notification_id)
    return JsonResponse({
        'message': 'Notification marked as read',
        'notification': notification.to_dict(),
    })


@json_api
@allow_methods('PUT')
def notification_read_all(request: HttpRequest) -> JsonResponse:
    """Mark all of the requester's notifications as read."""
    user_id = parse_requester_id(requester_id(request))
    updated = mark_all_notifications_read(user_id)
    return JsonResponse({'success': True, 'updated': updated})
