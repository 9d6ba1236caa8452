"""Tests for requester identity resolution."""

import pytest
from django.contrib.auth import get_user_model
from django.db import DatabaseError

from server.apps.files.exceptions import (
    IdentityLookupError,
    UnauthenticatedError,
)
from server.apps.files.infrastructure.identity import (
    Identity,
    is_admin,
    lookup_identity,
    parse_requester_id,
)

_USER_MODEL_GETTER = 'server.apps.files.infrastructure.identity.get_user_model'


def _raise_database_error(*args, **kwargs):
    raise DatabaseError('connection lost')


@pytest.mark.parametrize(('raw_value', 'expected'), [
    ('7', 7),
    (' 42 ', 42),
    (13, 13),
])
def test_parse_requester_id(raw_value, expected):
    """Test valid requester ids are parsed."""
    assert parse_requester_id(raw_value) == expected


@pytest.mark.parametrize('raw_value', [None, '', '   ', 'abc', '-1', '1.5', True])
def test_parse_requester_id_rejected(raw_value):
    """Test missing or malformed requester ids are rejected."""
    with pytest.raises(UnauthenticatedError) as exc_info:
        parse_requester_id(raw_value)

    assert exc_info.value.status_code == 401
    assert exc_info.value.message == 'User ID is required'


@pytest.mark.django_db
def test_lookup_identity_regular_user(user):
    """Test regular user is not an admin."""
    assert lookup_identity(user.id) == Identity(user_id=user.id, is_admin=False)


@pytest.mark.django_db
def test_lookup_identity_staff(admin_user):
    """Test staff user is an admin."""
    assert lookup_identity(admin_user.id).is_admin is True


@pytest.mark.django_db
def test_lookup_identity_superuser():
    """Test superuser is an admin."""
    superuser = get_user_model().objects.create_superuser(
        username='root',
        password='testpass123',
        email='root@example.com',
    )

    assert lookup_identity(superuser.id).is_admin is True


@pytest.mark.django_db
def test_lookup_identity_unknown_user():
    """Test unknown user id fails the lookup."""
    with pytest.raises(IdentityLookupError):
        lookup_identity(99999)


def test_lookup_identity_database_error(monkeypatch):
    """Test unreadable user store fails the lookup."""
    monkeypatch.setattr(_USER_MODEL_GETTER, _raise_database_error)

    with pytest.raises(IdentityLookupError) as exc_info:
        lookup_identity(7)

    assert isinstance(exc_info.value.__cause__, DatabaseError)


def test_is_admin_database_error(monkeypatch):
    """Test unreadable user store means non-admin instead of a crash."""
    monkeypatch.setattr(_USER_MODEL_GETTER, _raise_database_error)

    assert is_admin(7, lookup_identity) is False


def test_is_admin_unexpected_error_propagates():
    """Test errors outside the lookup contract are not masked."""
    def broken_lookup(user_id):
        raise RuntimeError('bug')

    with pytest.raises(RuntimeError):
        is_admin(7, broken_lookup)


def test_is_admin_uses_lookup(admin_lookup):
    """Test admin flag is taken from the lookup."""
    assert is_admin(5, admin_lookup) is True


def test_is_admin_lookup_failure(failing_lookup):
    """Test lookup failure means non-admin."""
    assert is_admin(5, failing_lookup) is False
