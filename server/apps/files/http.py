"""JSON API helpers shared by portal views.

Views are plain Django function views. ``json_api`` turns portal errors
into ``{"error": message}`` responses so no exception escapes to
Django's generic error page.
"""

import functools
import json
import logging
from collections.abc import Callable
from typing import Any

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from server.apps.files.exceptions import (
    BadRequestError,
    InternalError,
    MethodNotAllowedError,
    PortalError,
)

logger = logging.getLogger(__name__)

_View = Callable[..., HttpResponse]


def error_response(error: PortalError) -> JsonResponse:
    """Build the JSON response for a portal error.

    Args:
        error: Error to report.

    Returns:
        JSON response with the error message and status.
    """
    response = JsonResponse({'error': error.message}, status=error.status_code)
    if isinstance(error, MethodNotAllowedError):
        response['Allow'] = ', '.join(error.allowed_methods)
    return response


def json_api(view: _View) -> _View:
    """Wrap a view so portal errors become JSON error responses.

    The requester is authenticated by header, so CSRF protection is
    disabled for wrapped views.

    Args:
        view: Function view to wrap.

    Returns:
        Wrapped view.
    """
    @csrf_exempt
    @functools.wraps(view)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        try:
            return view(request, *args, **kwargs)
        except PortalError as error:
            logger.info(
                '%s %s rejected with %d: %s',
                request.method,
                request.path,
                error.status_code,
                error.message,
            )
            return error_response(error)
        except Exception:
            logger.exception('Unexpected error in %s %s', request.method, request.path)
            return error_response(InternalError())

    return wrapper


def allow_methods(*methods: str) -> Callable[[_View], _View]:
    """Restrict a view to the given HTTP methods.

    Unlike Django's ``require_http_methods`` the rejection is raised as
    ``MethodNotAllowedError`` so ``json_api`` reports it as JSON. Apply it
    inside ``json_api``.

    Args:
        methods: Accepted method names, e.g. 'GET'.

    Returns:
        View decorator.
    """
    def decorator(view: _View) -> _View:
        @functools.wraps(view)
        def wrapper(
            request: HttpRequest,
            *args: Any,
            **kwargs: Any,
        ) -> HttpResponse:
            if request.method not in methods:
                raise MethodNotAllowedError(methods)
            return view(request, *args, **kwargs)

        return wrapper

    return decorator


def requester_id(request: HttpRequest) -> str | None:
    """Read the requester's user id header.

    Args:
        request: Incoming request.

    Returns:
        Raw header value, or None when absent.
    """
    return request.headers.get(settings.PORTAL_REQUESTER_HEADER)


def json_body(request: HttpRequest) -> dict[str, Any]:
    """Parse a JSON object request body.

    Args:
        request: Incoming request.

    Returns:
        Parsed body, empty when the body is empty.

    Raises:
        BadRequestError: If the body is not a JSON object.
    """
    if not request.body:
        return {}
    try:
        body = json.loads(request.body)
    except (ValueError, UnicodeDecodeError) as error:
        raise BadRequestError('Invalid JSON body') from error
    if not isinstance(body, dict):
        raise BadRequestError('Invalid JSON body')
    return body


def query_int(request: HttpRequest, name: str, default: int) -> int:
    """Read an integer query parameter.

    Args:
        request: Incoming request.
        name: Query parameter name.
        default: Value used when the parameter is absent.

    Returns:
        Parsed integer.

    Raises:
        BadRequestError: If the parameter is not an integer.
    """
    raw_value = request.GET.get(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError as error:
        raise BadRequestError(f'{name} must be an integer') from error
