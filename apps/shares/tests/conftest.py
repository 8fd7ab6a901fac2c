import pytest
from datetime import datetime, timezone
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, Role
from apps.shares.services import record_purchase


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    """Create and return an admin who records purchases."""
    return User.objects.create_user(
        email='admin@example.com',
        password='AdminPass123!',
        name='Admin User',
        role=Role.ADMIN,
    )


@pytest.fixture
def member(db):
    """Create and return a member (u1)."""
    return User.objects.create_user(
        email='member@example.com',
        password='MemberPass123!',
        name='Kwame Member',
        role=Role.MEMBER,
    )


@pytest.fixture
def other_member(db):
    """Create and return a second member (u2)."""
    return User.objects.create_user(
        email='other@example.com',
        password='OtherPass123!',
        name='Ama Other',
        role=Role.MEMBER,
    )


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def admin_client(admin_user):
    """Return an API client authenticated as the admin."""
    return _client_for(admin_user)


@pytest.fixture
def member_client(member):
    """Return an API client authenticated as the member."""
    return _client_for(member)


@pytest.fixture
def make_purchase(admin_user):
    """Factory recording a purchase through the ledger writer."""

    def _make(user, quantity=1, price='10.00', when=None, method='cash', **extra):
        return record_purchase(
            user_id=user.id,
            quantity=quantity,
            price_per_share=Decimal(price),
            payment_method=method,
            purchase_date=when or datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc),
            recorded_by=admin_user,
            **extra,
        )

    return _make
