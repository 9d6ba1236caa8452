from django.urls import path

from server.apps.files import views

app_name = 'files'

urlpatterns = [
    path(
        'courses/materials/report',
        views.material_reports,
        name='material_reports',
    ),
    path(
        'courses/<str:course_code>/files',
        views.course_files,
        name='course_files',
    ),
    path(
        'courses/<str:course_code>/files/<str:file_id>',
        views.course_file_detail,
        name='course_file_detail',
    ),
    path(
        'admin/material-reports',
        views.admin_material_reports,
        name='admin_material_reports',
    ),
    path(
        'students/<int:student_id>/starred-materials',
        views.starred_materials,
        name='starred_materials',
    ),
    path(
        'students/<int:student_id>/starred-materials/<str:file_id>',
        views.starred_material_toggle,
        name='starred_material_toggle',
    ),
]
