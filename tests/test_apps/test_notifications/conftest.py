"""Shared fixtures for notifications app tests."""

import pytest
from django.contrib.auth import get_user_model

from server.apps.courses.models import Course
from server.apps.files.models import CourseFile
from server.apps.notifications.models import Notification, NotificationType

User = get_user_model()


@pytest.fixture
def uploader(db):
    """Create uploading student.

    Returns:
        User instance.
    """
    return User.objects.create_user(
        username='uploader',
        password='testpass123',
        first_name='Ada',
        last_name='Lovelace',
    )


@pytest.fixture
def classmate(db):
    """Create enrolled classmate.

    Returns:
        User instance.
    """
    return User.objects.create_user(username='classmate', password='testpass123')


@pytest.fixture
def course(uploader, classmate):
    """Create course with both students enrolled.

    Returns:
        Course instance.
    """
    course = Course.objects.create(code='CS101', name='Introduction to CS')
    course.students.add(uploader, classmate)
    return course


@pytest.fixture
def course_file(uploader, course):
    """Create course file uploaded by ``uploader``.

    Returns:
        CourseFile instance.
    """
    return CourseFile.objects.create(
        course=course,
        user=uploader,
        file_name='week1.pdf',
        file_size=100,
        file_type='application/pdf',
        file_url='https://files.example.com/course-files/CS101/1-1-a.pdf',
    )


@pytest.fixture
def make_notification(classmate):
    """Factory for notifications of ``classmate``.

    Returns:
        Callable creating a notification.
    """
    def factory(user=None, is_read=False):
        return Notification.objects.create(
            user=user or classmate,
            type=NotificationType.FILE_UPLOAD,
            title='New file in CS101',
            message='Ada Lovelace uploaded "week1.pdf" to Introduction to CS',
            link='/courses/CS101',
            is_read=is_read,
        )
    return factory
