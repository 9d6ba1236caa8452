"""Shared fixtures for files app tests."""

import boto3
import pytest
from django.contrib.auth import get_user_model
from django.core.files.storage import InMemoryStorage
from django.core.files.uploadedfile import SimpleUploadedFile
from moto import mock_aws

from server.apps.courses.models import Course
from server.apps.files.exceptions import IdentityLookupError
from server.apps.files.infrastructure.identity import Identity
from server.apps.files.infrastructure.storage import FileStorage
from server.apps.files.models import CourseFile

User = get_user_model()

TEST_BUCKET = 'course-files'
TEST_BASE_URL = 'https://files.example.com/course-files/'


class RecordingStorage(InMemoryStorage):
    """In-memory object store that records saves and deletes."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.saved = []
        self.deleted = []

    def save(self, name, content, max_length=None):
        saved_name = super().save(name, content, max_length)
        self.saved.append(saved_name)
        return saved_name

    def delete(self, name):
        self.deleted.append(name)
        super().delete(name)


class BrokenWriteStorage(RecordingStorage):
    """Object store that rejects every upload."""

    def _save(self, name, content):
        raise OSError('object store unavailable')


class BrokenDeleteStorage(RecordingStorage):
    """Object store that rejects every delete."""

    def delete(self, name):
        self.deleted.append(name)
        raise OSError('object store unavailable')


@pytest.fixture
def user(db):
    """Create test user.

    Returns:
        User instance for testing.
    """
    return User.objects.create_user(
        username='testuser',
        password='testpass123',
        email='test@example.com',
        first_name='Test',
        last_name='User',
    )


@pytest.fixture
def other_user(db):
    """Create second, non-admin test user.

    Returns:
        Second user instance.
    """
    return User.objects.create_user(
        username='otheruser',
        password='testpass123',
        email='other@example.com',
    )


@pytest.fixture
def admin_user(db):
    """Create staff user.

    Returns:
        Admin user instance.
    """
    return User.objects.create_user(
        username='adminuser',
        password='testpass123',
        email='admin@example.com',
        is_staff=True,
    )


@pytest.fixture
def course(db):
    """Create CS101 course.

    Returns:
        Course instance.
    """
    return Course.objects.create(code='CS101', name='Introduction to CS')


@pytest.fixture
def storage():
    """In-memory object store.

    Returns:
        RecordingStorage instance.
    """
    return RecordingStorage(base_url=TEST_BASE_URL)


@pytest.fixture
def broken_write_storage():
    """Object store whose uploads fail.

    Returns:
        BrokenWriteStorage instance.
    """
    return BrokenWriteStorage(base_url=TEST_BASE_URL)


@pytest.fixture
def broken_delete_storage():
    """Object store whose deletes fail.

    Returns:
        BrokenDeleteStorage instance.
    """
    return BrokenDeleteStorage(base_url=TEST_BASE_URL)


@pytest.fixture
def admin_lookup():
    """Identity lookup that reports every user as admin.

    Returns:
        Identity lookup callable.
    """
    return lambda user_id: Identity(user_id=user_id, is_admin=True)


@pytest.fixture
def failing_lookup():
    """Identity lookup that always fails.

    Returns:
        Identity lookup callable.
    """
    def lookup(user_id):
        raise IdentityLookupError(f'Unknown user: {user_id}')
    return lookup


@pytest.fixture
def pdf_upload():
    """1 KB PDF upload.

    Returns:
        SimpleUploadedFile with PDF content type.
    """
    return SimpleUploadedFile(
        'lecture-notes.pdf',
        b'%PDF' + b'a' * 1020,
        content_type='application/pdf',
    )


@pytest.fixture
def stored_file(user, course, storage):
    """Course file present both in storage and database.

    Returns:
        CourseFile instance owned by ``user``.
    """
    storage_path = storage.save(
        f'CS101/{user.id}-1700000000000-abc.pdf',
        SimpleUploadedFile('stored.pdf', b'stored content'),
    )
    return CourseFile.objects.create(
        course=course,
        user=user,
        file_name='stored.pdf',
        file_size=14,
        file_type='application/pdf',
        file_url=storage.url(storage_path),
    )


@pytest.fixture
def mock_s3():
    """Mock S3 service with course-files bucket.

    Yields:
        boto3 S3 resource with course-files bucket created.
    """
    with mock_aws():
        # Create S3 resource
        conn = boto3.resource('s3', region_name='us-east-1')

        # Create bucket
        conn.create_bucket(Bucket=TEST_BUCKET)

        yield conn


@pytest.fixture
def s3_storage(mock_s3):
    """FileStorage bound to the mocked bucket.

    Returns:
        FileStorage instance configured like production.
    """
    return FileStorage(
        bucket_name=TEST_BUCKET,
        access_key='testing',
        secret_key='testing',
        region_name='us-east-1',
        file_overwrite=False,
        default_acl=None,
        querystring_auth=False,
    )
