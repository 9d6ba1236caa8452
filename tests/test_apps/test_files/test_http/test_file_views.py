"""Tests for course file HTTP endpoints."""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse

from server.apps.files.models import CourseFile, MaterialReport, ReportStatus

_STORAGE_GETTER = 'server.apps.files.views.get_storage'


def _as_user(user_id):
    return {'X-User-Id': str(user_id)}


@pytest.fixture
def api_storage(storage, monkeypatch):
    """Route views to the in-memory object store.

    Returns:
        RecordingStorage used by views.
    """
    monkeypatch.setattr(_STORAGE_GETTER, lambda: storage)
    return storage


@pytest.mark.django_db
class TestCourseFilesEndpoint:
    """Tests for listing and uploading course files."""

    def test_upload(self, client, user, course, api_storage, pdf_upload):
        """Test multipart upload creates a course file."""
        response = client.post(
            reverse('files:course_files', args=['CS101']),
            {'file': pdf_upload, 'description': 'Week 1'},
            headers=_as_user(user.id),
        )

        assert response.status_code == 200
        payload = response.json()
        assert payload['message'] == 'File uploaded successfully'
        assert payload['file']['file_size'] == 1024
        assert payload['file']['description'] == 'Week 1'
        assert payload['file']['user_id'] == user.id
        assert len(api_storage.saved) == 1

    def test_upload_without_file(self, client, user, course, api_storage):
        """Test upload without file part."""
        response = client.post(
            reverse('files:course_files', args=['CS101']),
            {'description': 'nothing'},
            headers=_as_user(user.id),
        )

        assert response.status_code == 400
        assert response.json() == {'error': 'File is required'}

    def test_upload_without_requester(self, client, course, api_storage, pdf_upload):
        """Test upload without requester header."""
        response = client.post(
            reverse('files:course_files', args=['CS101']),
            {'file': pdf_upload},
        )

        assert response.status_code == 401
        assert response.json() == {'error': 'User ID is required'}
        assert api_storage.saved == []

    def test_upload_bad_type(self, client, user, course, api_storage):
        """Test disallowed MIME type is a client error."""
        upload = SimpleUploadedFile(
            'video.mp4',
            b'data',
            content_type='video/mp4',
        )

        response = client.post(
            reverse('files:course_files', args=['CS101']),
            {'file': upload},
            headers=_as_user(user.id),
        )

        assert response.status_code == 400
        assert response.json() == {'error': 'Invalid file type'}

    def test_upload_empty_file(self, client, user, course, api_storage):
        """Test zero-byte upload is a client error."""
        upload = SimpleUploadedFile(
            'empty.pdf',
            b'',
            content_type='application/pdf',
        )

        response = client.post(
            reverse('files:course_files', args=['CS101']),
            {'file': upload},
            headers=_as_user(user.id),
        )

        assert response.status_code == 400
        assert response.json() == {'error': 'File is empty'}
        assert api_storage.saved == []
        assert CourseFile.objects.count() == 0

    def test_upload_storage_failure(
        self,
        client,
        user,
        course,
        broken_write_storage,
        pdf_upload,
        monkeypatch,
    ):
        """Test object store failure is a server error."""
        monkeypatch.setattr(_STORAGE_GETTER, lambda: broken_write_storage)

        response = client.post(
            reverse('files:course_files', args=['CS101']),
            {'file': pdf_upload},
            headers=_as_user(user.id),
        )

        assert response.status_code == 500
        assert response.json()['error'].startswith('Failed to upload file')
        assert CourseFile.objects.count() == 0

    def test_list(self, client, user, stored_file):
        """Test listing course files."""
        response = client.get(
            reverse('files:course_files', args=['CS101']),
            headers=_as_user(user.id),
        )

        assert response.status_code == 200
        files = response.json()['files']
        assert [entry['id'] for entry in files] == [str(stored_file.id)]
        assert files[0]['user_info'] == {'full_name': 'Test User'}

    def test_list_unknown_course(self, client, user):
        """Test listing unknown course."""
        response = client.get(
            reverse('files:course_files', args=['NOPE1']),
            headers=_as_user(user.id),
        )

        assert response.status_code == 404
        assert response.json() == {'error': 'Course not found'}

    def test_method_not_allowed(self, client, user, course):
        """Test unsupported method is rejected."""
        response = client.patch(
            reverse('files:course_files', args=['CS101']),
            headers=_as_user(user.id),
        )

        assert response.status_code == 405
        assert response.json() == {'error': 'Method not allowed'}
        assert response['Allow'] == 'GET, POST'


@pytest.mark.django_db
class TestCourseFileDetailEndpoint:
    """Tests for deleting course files."""

    def test_delete_by_owner(self, client, user, stored_file, api_storage):
        """Test owner deletes own file."""
        response = client.delete(
            reverse('files:course_file_detail', args=['CS101', stored_file.id]),
            headers=_as_user(user.id),
        )

        assert response.status_code == 200
        assert response.json() == {'message': 'File deleted successfully'}
        assert not CourseFile.objects.filter(id=stored_file.id).exists()

    def test_delete_forbidden(self, client, other_user, stored_file, api_storage):
        """Test non-owner cannot delete."""
        response = client.delete(
            reverse('files:course_file_detail', args=['CS101', stored_file.id]),
            headers=_as_user(other_user.id),
        )

        assert response.status_code == 403
        assert CourseFile.objects.filter(id=stored_file.id).exists()
        assert api_storage.deleted == []

    def test_delete_by_admin(self, client, admin_user, stored_file, api_storage):
        """Test admin deletes any file."""
        response = client.delete(
            reverse('files:course_file_detail', args=['CS101', stored_file.id]),
            headers=_as_user(admin_user.id),
        )

        assert response.status_code == 200
        assert not CourseFile.objects.filter(id=stored_file.id).exists()

    def test_delete_not_found(self, client, user, course, api_storage):
        """Test deleting unknown file."""
        response = client.delete(
            reverse(
                'files:course_file_detail',
                args=['CS101', '00000000-0000-0000-0000-000000000000'],
            ),
            headers=_as_user(user.id),
        )

        assert response.status_code == 404
        assert response.json() == {'error': 'File not found'}

    def test_delete_malformed_id(self, client, user, stored_file, api_storage):
        """Test malformed file id gets a JSON not-found response."""
        response = client.delete(
            '/api/courses/CS101/files/not-a-uuid',
            headers=_as_user(user.id),
        )

        assert response.status_code == 404
        assert response['Content-Type'] == 'application/json'
        assert response.json() == {'error': 'File not found'}
        assert CourseFile.objects.filter(id=stored_file.id).exists()
        assert api_storage.deleted == []

    def test_delete_method_not_allowed(self, client, user, stored_file):
        """Test GET on a file is rejected as JSON."""
        response = client.get(
            reverse('files:course_file_detail', args=['CS101', stored_file.id]),
            headers=_as_user(user.id),
        )

        assert response.status_code == 405
        assert response.json() == {'error': 'Method not allowed'}
        assert response['Allow'] == 'DELETE'


@pytest.mark.django_db
class TestMaterialReportEndpoints:
    """Tests for reporting and moderating materials."""

    def test_report(self, client, other_user, stored_file):
        """Test reporting a material."""
        response = client.post(
            reverse('files:material_reports'),
            {'materialId': str(stored_file.id), 'reason': 'spam'},
            content_type='application/json',
            headers=_as_user(other_user.id),
        )

        assert response.status_code == 200
        assert response.json()['report']['status'] == 'pending'

    def test_report_invalid_json(self, client, other_user):
        """Test malformed body is rejected."""
        response = client.post(
            reverse('files:material_reports'),
            '{not json',
            content_type='application/json',
            headers=_as_user(other_user.id),
        )

        assert response.status_code == 400
        assert response.json() == {'error': 'Invalid JSON body'}

    def test_admin_list_forbidden(self, client, user):
        """Test non-admin cannot list reports."""
        response = client.get(
            reverse('files:admin_material_reports'),
            headers=_as_user(user.id),
        )

        assert response.status_code == 403

    def test_admin_review(
        self,
        client,
        other_user,
        admin_user,
        stored_file,
        api_storage,
    ):
        """Test admin upholds a report and the material is removed."""
        report = MaterialReport.objects.create(
            material=stored_file,
            reporter=other_user,
            reason='copyright',
        )

        listed = client.get(
            reverse('files:admin_material_reports'),
            {'status': 'pending'},
            headers=_as_user(admin_user.id),
        )
        response = client.put(
            reverse('files:admin_material_reports'),
            {'reportId': str(report.id), 'action': 'reviewed'},
            content_type='application/json',
            headers=_as_user(admin_user.id),
        )

        assert [entry['id'] for entry in listed.json()['reports']] == [
            str(report.id),
        ]
        assert response.status_code == 200
        assert response.json() == {
            'success': True,
            'message': 'Material removed and report processed',
        }
        report.refresh_from_db()
        assert report.status == ReportStatus.REVIEWED
        assert not CourseFile.objects.filter(id=stored_file.id).exists()


@pytest.mark.django_db
class TestStarredMaterialEndpoints:
    """Tests for starring materials."""

    def test_toggle_and_list(self, client, user, stored_file):
        """Test starring a material and listing stars."""
        toggled = client.post(
            reverse(
                'files:starred_material_toggle',
                args=[user.id, stored_file.id],
            ),
            headers=_as_user(user.id),
        )
        listed = client.get(
            reverse('files:starred_materials', args=[user.id]),
            headers=_as_user(user.id),
        )

        assert toggled.json() == {
            'status': 'starred',
            'file_id': str(stored_file.id),
        }
        stars = listed.json()['starred_materials']
        assert [star['file_id'] for star in stars] == [str(stored_file.id)]

    def test_list_forbidden(self, client, user, other_user):
        """Test other students cannot list stars."""
        response = client.get(
            reverse('files:starred_materials', args=[user.id]),
            headers=_as_user(other_user.id),
        )

        assert response.status_code == 403
        assert response.json() == {'error': 'Forbidden'}

    def test_toggle_malformed_id(self, client, user):
        """Test malformed file id gets a JSON not-found response."""
        response = client.post(
            f'/api/students/{user.id}/starred-materials/not-a-uuid',
            headers=_as_user(user.id),
        )

        assert response.status_code == 404
        assert response.json() == {'error': 'File not found'}
