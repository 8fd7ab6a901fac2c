"""
Share ledger store access.

`ledger_operation` wraps every service call that touches the database and
turns connection-level failures into the retryable LedgerUnavailableError.
The member directory helpers are the only reads the core makes against the
user table.
"""

import functools
import logging
import uuid

from django.contrib.auth import get_user_model
from django.db import InterfaceError, OperationalError

from apps.accounts.models import Role
from ..exceptions import LedgerUnavailableError, MemberNotFoundError


logger = logging.getLogger(__name__)


def ledger_operation(func):
    """Translate database connectivity errors into LedgerUnavailableError."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            logger.error("Share ledger unavailable during %s: %s", func.__qualname__, exc)
            raise LedgerUnavailableError() from exc

    return wrapper


def parse_user_id(user_id):
    """Return user_id as a UUID, or None when it is malformed."""
    if isinstance(user_id, uuid.UUID):
        return user_id
    try:
        return uuid.UUID(str(user_id))
    except (TypeError, ValueError, AttributeError):
        return None


@ledger_operation
def get_member(user_id):
    """
    Fetch a user that may own share purchases.

    Raises:
        MemberNotFoundError: Unknown or malformed id, or the user is not a member.
        LedgerUnavailableError: The database could not be reached.
    """
    User = get_user_model()
    parsed = parse_user_id(user_id)
    if parsed is None:
        raise MemberNotFoundError()
    try:
        return User.objects.get(id=parsed, role=Role.MEMBER)
    except User.DoesNotExist:
        raise MemberNotFoundError()


@ledger_operation
def directory_lookup(user_ids):
    """Map user id -> {'name', 'email'} in a single query."""
    User = get_user_model()
    rows = User.objects.filter(id__in=list(user_ids)).values('id', 'name', 'email')
    return {row['id']: {'name': row['name'], 'email': row['email']} for row in rows}
