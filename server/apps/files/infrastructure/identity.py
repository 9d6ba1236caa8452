"""Requester identity resolution.

Requests carry the requester's user id in a header. The admin flag is
resolved separately through ``lookup_identity`` and is always a real
``bool`` past this module.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias

from django.contrib.auth import get_user_model
from django.db import DatabaseError

from server.apps.files.exceptions import (
    IdentityLookupError,
    UnauthenticatedError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Identity:
    """Resolved user identity."""

    user_id: int
    is_admin: bool


# Lookups signal every failure, unknown user or backend error alike, by
# raising IdentityLookupError
IdentityLookup: TypeAlias = Callable[[int], Identity]


def parse_requester_id(raw_value: str | int | None) -> int:
    """Parse the header-supplied requester id.

    Args:
        raw_value: Header value, or an already parsed id.

    Returns:
        Requester's user id.

    Raises:
        UnauthenticatedError: If the value is missing or not an id.
    """
    if raw_value is None or isinstance(raw_value, bool):
        raise UnauthenticatedError
    if isinstance(raw_value, int):
        return raw_value

    raw_value = raw_value.strip()
    if not raw_value.isdigit():
        logger.warning('Rejected malformed requester id: %r', raw_value)
        raise UnauthenticatedError
    return int(raw_value)


def lookup_identity(user_id: int) -> Identity:
    """Resolve a user id to an identity with a typed admin flag.

    Staff and superusers are admins.

    Args:
        user_id: User id to resolve.

    Returns:
        Identity of the user.

    Raises:
        IdentityLookupError: If the user does not exist or the user store
            cannot be read.
    """
    try:
        user = (
            get_user_model().objects
            .filter(pk=user_id)
            .only('pk', 'is_staff', 'is_superuser')
            .first()
        )
    except DatabaseError as exc:
        raise IdentityLookupError(f'Cannot read user: {user_id}') from exc
    if user is None:
        raise IdentityLookupError(f'Unknown user: {user_id}')
    return Identity(
        user_id=user.pk,
        is_admin=bool(user.is_staff or user.is_superuser),
    )


def is_admin(user_id: int, identity_lookup: IdentityLookup) -> bool:
    """Check the admin flag, treating lookup failures as non-admin.

    The lookup reports failures through ``IdentityLookupError``. Any other
    exception is a bug in the lookup and propagates.

    Args:
        user_id: User id to check.
        identity_lookup: Identity lookup to use.

    Returns:
        True only if the lookup succeeded and reports an admin.
    """
    try:
        return identity_lookup(user_id).is_admin
    except IdentityLookupError:
        logger.warning('Identity lookup failed for user %d', user_id)
        return False
