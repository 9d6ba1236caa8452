"""HTTP endpoints for course files, reports and starred materials."""


from django.http import HttpRequest, JsonResponse

from server.apps.files.exceptions import BadRequestError
from server.apps.files.http import (
    allow_methods,
    json_api,
    json_body,
    requester_id,
)
from server.apps.files.infrastructure.storage import get_storage
from server.apps.files.logic.file_operations import (
    ingest_course_file,
    list_course_files,
    remove_course_file,
)
from server.apps.files.logic.report_operations import (
    list_material_reports,
    report_material,
    resolve_material_report,
)
from server.apps.files.logic.star_operations import (
    list_starred_materials,
    toggle_starred_material,
)


@json_api
@allow_methods('GET', 'POST')
def course_files(request: HttpRequest, course_code: str) -> JsonResponse:
    """List a course's files or upload a new one."""
    if request.method == 'GET':
        listings = list_course_files(course_code, requester_id(request))
        return JsonResponse({
            'files': [listing.to_dict() for listing in listings],
        })

    upload = request.FILES.get('file')
    if upload is None:
        raise BadRequestError('File is required')

    course_file = ingest_course_file(
        course_code,
        requester_id(request),
        upload,
        request.POST.get('description'),
        storage=get_storage(),
    )
    return JsonResponse({
        'message': 'File uploaded successfully',
        'file': course_file.to_dict(),
    })


@json_api
@allow_methods('DELETE')
def course_file_detail(
    request: HttpRequest,
    course_code: str,
    file_id: str,
) -> JsonResponse:
    """Delete a course file."""
    remove_course_file(
        course_code,
        file_id,
        requester_id(request),
        storage=get_storage(),
    )
    return JsonResponse({'message': 'File deleted successfully'})


@json_api
@allow_methods('POST')
def material_reports(request: HttpRequest) -> JsonResponse:
    """Report a course material."""
    body = json_body(request)
    report = report_material(
        requester_id(request),
        body.get('materialId'),
        body.get('reason'),
        body.get('details'),
    )
    return JsonResponse({
        'message': 'Material reported successfully',
        'report': report.to_dict(),
    })


@json_api
@allow_methods('GET', 'PUT')
def admin_material_reports(request: HttpRequest) -> JsonResponse:
    """List reports for moderation or resolve one."""
    if request.method == 'GET':
        reports = list_material_reports(
            requester_id(request),
            request.GET.get('status'),
        )
        return JsonResponse({
            'reports': [report.to_dict() for report in reports],
        })

    body = json_body(request)
    action = body.get('action')
    resolve_material_report(
        requester_id(request),
        body.get('reportId'),
        action,
        storage=get_storage(),
    )
    if action == 'reviewed':
        message = 'Material removed and report processed'
    else:
        message = 'Report dismissed successfully'
    return JsonResponse({'success': True, 'message': message})


@json_api
@allow_methods('GET')
def starred_materials(request: HttpRequest, student_id: int) -> JsonResponse:
    """List a student's starred materials."""
    stars = list_starred_materials(requester_id(request), student_id)
    return JsonResponse({
        'starred_materials': [
            {
                'file_id': str(star.file_id),
                'starred_at': star.starred_at.isoformat(),
                'course_file': star.file.to_dict(),
            }
            for star in stars
        ],
    })


@json_api
@allow_methods('POST')
def starred_material_toggle(
    request: HttpRequest,
    student_id: int,
    file_id: str,
) -> JsonResponse:
    """Star or unstar a material for a student."""
    state = toggle_starred_material(requester_id(request), student_id, file_id)
    return JsonResponse({'status': str(state), 'file_id': file_id})
