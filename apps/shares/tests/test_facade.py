import dataclasses
import pytest
from datetime import datetime, timezone
from decimal import Decimal
from unittest import mock
from django.db import OperationalError
from apps.accounts.models import Role, User
from apps.shares.exceptions import (
    ShareAccessForbiddenError,
    ShareValidationError,
    MemberNotFoundError,
    LedgerUnavailableError,
)
from apps.shares.models import SharePurchase
from apps.shares.services import Principal, ShareQueryFacade


@pytest.fixture
def admin_facade(admin_user):
    return ShareQueryFacade(Principal.from_user(admin_user))


@pytest.fixture
def member_facade(member):
    return ShareQueryFacade(Principal.from_user(member))


class TestPrincipal:

    def test_from_user(self, admin_user):
        principal = Principal.from_user(admin_user)

        assert principal.id == admin_user.id
        assert principal.role == Role.ADMIN
        assert principal.is_admin

    def test_is_frozen(self, member):
        principal = Principal.from_user(member)

        with pytest.raises(dataclasses.FrozenInstanceError):
            principal.role = Role.ADMIN


# =============================================================================
# Member scope
# =============================================================================

@pytest.mark.django_db
class TestMemberScope:

    def test_member_reads_own_shares(self, member_facade, member, make_purchase):
        make_purchase(member, quantity=5)

        result = member_facade.member_shares()

        assert result['member_id'] == member.id
        assert result['total_shares'] == Decimal('5')
        assert result['count'] == 1

    def test_member_may_name_own_id(self, member_facade, member):
        result = member_facade.member_shares(str(member.id))

        assert result['count'] == 0

    def test_member_cannot_read_other_member(self, member_facade, other_member, make_purchase):
        make_purchase(other_member, quantity=5)

        with pytest.raises(ShareAccessForbiddenError) as exc_info:
            member_facade.member_shares(other_member.id)

        assert exc_info.value.status_code == 403

    def test_member_cannot_read_other_monthly(self, member_facade, other_member):
        with pytest.raises(ShareAccessForbiddenError):
            member_facade.member_monthly_shares(other_member.id)

    def test_member_monthly_rollup(self, member_facade, member, make_purchase):
        make_purchase(member, quantity=5)
        make_purchase(member, quantity=3)

        rollup = member_facade.member_monthly_shares()

        assert rollup[0]['month'] == '2025-03'
        assert rollup[0]['total_shares'] == Decimal('8')

    @pytest.mark.parametrize('operation, args', [
        ('all_purchases', ()),
        ('global_stats', ()),
        ('available_months', ()),
        ('month_statistics', (3, 2025)),
    ])
    def test_admin_reads_forbidden(self, member_facade, operation, args):
        with pytest.raises(ShareAccessForbiddenError):
            getattr(member_facade, operation)(*args)

    def test_forbidden_before_month_validation(self, member_facade):
        with pytest.raises(ShareAccessForbiddenError):
            member_facade.month_statistics(13, 2025)

    def test_member_cannot_record(self, member_facade, member):
        with pytest.raises(ShareAccessForbiddenError):
            member_facade.record_purchase(
                user_id=member.id,
                quantity=1,
                price_per_share=Decimal('10.00'),
                payment_method='cash',
            )

        assert not SharePurchase.objects.exists()


# =============================================================================
# Admin scope
# =============================================================================

@pytest.mark.django_db
class TestAdminScope:

    def test_admin_reads_any_member(self, admin_facade, member, make_purchase):
        make_purchase(member, quantity=4)

        result = admin_facade.member_shares(member.id)

        assert result['member_id'] == member.id
        assert result['member_name'] == 'Kwame Member'
        assert result['total_shares'] == Decimal('4')

    def test_admin_unknown_member(self, admin_facade):
        with pytest.raises(MemberNotFoundError):
            admin_facade.member_shares('11111111-1111-1111-1111-111111111111')

    def test_admin_has_no_own_shares(self, admin_facade):
        with pytest.raises(ShareAccessForbiddenError):
            admin_facade.member_shares()

        with pytest.raises(ShareAccessForbiddenError):
            admin_facade.member_monthly_shares()

    def test_member_lookup_outage(self, admin_facade, member):
        with mock.patch.object(
            User.objects, 'get', side_effect=OperationalError('could not connect to server')
        ):
            with pytest.raises(LedgerUnavailableError) as exc_info:
                admin_facade.member_shares(member.id)

        assert exc_info.value.status_code == 503
        assert isinstance(exc_info.value.__cause__, OperationalError)

    def test_admin_reads_member_monthly(self, admin_facade, member, make_purchase):
        make_purchase(member, quantity=4)

        rollup = admin_facade.member_monthly_shares(member.id)

        assert len(rollup) == 1

    def test_admin_records_as_recorder(self, admin_facade, admin_user, member):
        purchase = admin_facade.record_purchase(
            user_id=member.id,
            quantity=2,
            price_per_share=Decimal('10.00'),
            payment_method='skrill',
        )

        purchase.refresh_from_db()
        assert purchase.recorded_by == admin_user
        assert purchase.total_amount == Decimal('20.00')

    def test_all_purchases_with_limit(self, admin_facade, member, make_purchase):
        for day in (1, 2, 3):
            make_purchase(member, when=datetime(2025, 3, day, tzinfo=timezone.utc))

        assert len(admin_facade.all_purchases()) == 3
        assert len(admin_facade.all_purchases(limit=1)) == 1

    def test_month_statistics_shape(self, admin_facade):
        report = admin_facade.month_statistics(3, 2025)

        assert report['month'] == 3
        assert report['year'] == 2025
        assert report['month_string'] == '2025-03'
        assert report['shares'] == []
        assert report['top_contributors'] == []
        assert report['statistics']['transaction_count'] == 0

    def test_month_statistics_invalid_month(self, admin_facade):
        with pytest.raises(ShareValidationError):
            admin_facade.month_statistics(13, 2025)

    def test_global_stats_and_months(self, admin_facade, member, make_purchase):
        make_purchase(member, quantity=6)

        assert admin_facade.global_stats()['total_shares'] == Decimal('6')
        assert admin_facade.available_months()[0]['month'] == '2025-03'
