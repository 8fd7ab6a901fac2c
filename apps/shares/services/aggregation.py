"""
Aggregation Engine
==================

Read-only rollups over the share ledger. Every call recomputes from the
SharePurchase table; nothing is cached or persisted.

Classes:
    ShareAggregation: Static methods for per-member, monthly and
        organisation-wide share statistics.

Example:
    Admin dashboard numbers::

        from apps.shares.services import ShareAggregation

        stats = ShareAggregation.global_stats()
        stats['total_shares']          # Decimal('125.0000')
        stats['top_members'][0]        # {'user_id': ..., 'name': ..., 'total_shares': ...}

Note:
    Quantities and amounts are summed in Python over Decimal values so no
    precision is lost to database float arithmetic. Rounding to display
    precision happens in the serializers.
"""

from decimal import Decimal

from ..models import SharePurchase
from ..periods import month_bucket
from .store import ledger_operation, directory_lookup


ZERO = Decimal('0')

TOP_MEMBERS_LIMIT = 10
TOP_CONTRIBUTORS_LIMIT = 5
MONTHLY_DISTRIBUTION_MONTHS = 12


def _rank_by_shares(totals, limit):
    """Sort per-user totals by shares descending; ties keep encounter order."""
    ranked = sorted(totals.items(), key=lambda item: item[1]['total_shares'], reverse=True)
    return ranked[:limit]


class ShareAggregation:
    """
    Share ledger rollups.

    Methods:
        member_shares: Total shares and purchase list for one user.
        member_monthly_shares: One user's purchases grouped by month.
        global_stats: Organisation totals, last 12 months and top 10 members.
        month_statistics: Purchases and statistics for one month bucket.
        available_months: Months present in the ledger with counts.
        all_purchases: Every ledger row with purchaser and recorder.
        stale_month_buckets: Rows whose month key no longer matches purchase_date.

    All methods return plain dictionaries and lists (or SharePurchase
    instances where the caller serializes full rows).
    """

    @staticmethod
    @ledger_operation
    def member_shares(user_id):
        """
        Sum a user's shares and list their purchases.

        Args:
            user_id (UUID): Owner of the purchases.

        Returns:
            dict: {
                'total_shares': Decimal,
                'purchases': list[SharePurchase]  # newest first
            }
        """
        purchases = list(SharePurchase.objects.for_user(user_id).with_people())
        return {
            'total_shares': sum((p.quantity for p in purchases), ZERO),
            'purchases': purchases,
        }

    @staticmethod
    @ledger_operation
    def member_monthly_shares(user_id):
        """
        Group a user's purchases by their stored month key.

        Groups are sorted by month descending; rows inside a group keep
        purchase_date descending order.

        Returns:
            list[dict]: [{
                'month': '2025-03',
                'total_shares': Decimal,
                'total_amount': Decimal,
                'purchases': [{'id', 'quantity', 'price_per_share',
                               'total_amount', 'purchase_date'}, ...]
            }, ...]
        """
        groups = {}
        for purchase in SharePurchase.objects.for_user(user_id):
            group = groups.setdefault(purchase.month, {
                'month': purchase.month,
                'total_shares': ZERO,
                'total_amount': ZERO,
                'purchases': [],
            })
            group['total_shares'] += purchase.quantity
            group['total_amount'] += purchase.total_amount
            group['purchases'].append({
                'id': purchase.id,
                'quantity': purchase.quantity,
                'price_per_share': purchase.price_per_share,
                'total_amount': purchase.total_amount,
                'purchase_date': purchase.purchase_date,
            })

        return [groups[month] for month in sorted(groups, reverse=True)]

    @staticmethod
    @ledger_operation
    def global_stats():
        """
        Organisation-wide totals.

        Returns:
            dict: {
                'total_shares': Decimal,
                'total_value': Decimal,
                'monthly_distribution': [{'month', 'shares', 'value'}, ...],  # 12 newest
                'top_members': [{'user_id', 'name', 'email', 'total_shares'}, ...]  # top 10
            }
        """
        total_shares = ZERO
        total_value = ZERO
        months = {}
        per_user = {}

        rows = SharePurchase.objects.values_list('user_id', 'quantity', 'total_amount', 'month')
        for user_id, quantity, amount, month in rows:
            total_shares += quantity
            total_value += amount

            bucket = months.setdefault(month, {'month': month, 'shares': ZERO, 'value': ZERO})
            bucket['shares'] += quantity
            bucket['value'] += amount

            member = per_user.setdefault(user_id, {'total_shares': ZERO})
            member['total_shares'] += quantity

        top = _rank_by_shares(per_user, TOP_MEMBERS_LIMIT)
        directory = directory_lookup(user_id for user_id, _ in top)

        top_members = []
        for user_id, totals in top:
            person = directory.get(user_id, {})
            top_members.append({
                'user_id': user_id,
                'name': person.get('name'),
                'email': person.get('email'),
                'total_shares': totals['total_shares'],
            })

        recent_months = sorted(months, reverse=True)[:MONTHLY_DISTRIBUTION_MONTHS]
        return {
            'total_shares': total_shares,
            'total_value': total_value,
            'monthly_distribution': [months[month] for month in recent_months],
            'top_members': top_members,
        }

    @staticmethod
    @ledger_operation
    def month_statistics(month_key):
        """
        Statistics for one month bucket.

        `average_price` is the plain mean of price_per_share over the
        month's rows, not weighted by quantity. An empty month returns
        zeros and empty lists.

        Args:
            month_key (str): 'YYYY-MM' as built by periods.month_key.

        Returns:
            dict: {
                'shares': list[SharePurchase],
                'statistics': {'total_shares', 'total_value',
                               'average_price', 'transaction_count'},
                'top_contributors': [{'user_id', 'name', 'email', 'total_shares',
                                      'total_amount', 'transaction_count'}, ...]  # top 5
            }
        """
        shares = list(SharePurchase.objects.for_month(month_key).with_people())

        total_shares = ZERO
        total_value = ZERO
        price_sum = ZERO
        per_user = {}
        for purchase in shares:
            total_shares += purchase.quantity
            total_value += purchase.total_amount
            price_sum += purchase.price_per_share

            contributor = per_user.setdefault(purchase.user_id, {
                'name': purchase.user.name,
                'email': purchase.user.email,
                'total_shares': ZERO,
                'total_amount': ZERO,
                'transaction_count': 0,
            })
            contributor['total_shares'] += purchase.quantity
            contributor['total_amount'] += purchase.total_amount
            contributor['transaction_count'] += 1

        count = len(shares)
        statistics = {
            'total_shares': total_shares,
            'total_value': total_value,
            'average_price': price_sum / count if count else ZERO,
            'transaction_count': count,
        }

        top_contributors = [
            {'user_id': user_id, **totals}
            for user_id, totals in _rank_by_shares(per_user, TOP_CONTRIBUTORS_LIMIT)
        ]

        return {
            'shares': shares,
            'statistics': statistics,
            'top_contributors': top_contributors,
        }

    @staticmethod
    @ledger_operation
    def available_months():
        """
        Months present in the ledger, newest first.

        Returns:
            list[dict]: [{'month', 'share_count', 'transaction_count'}, ...]
        """
        months = {}
        for month, quantity in SharePurchase.objects.values_list('month', 'quantity'):
            entry = months.setdefault(month, {
                'month': month,
                'share_count': ZERO,
                'transaction_count': 0,
            })
            entry['share_count'] += quantity
            entry['transaction_count'] += 1

        return [months[month] for month in sorted(months, reverse=True)]

    @staticmethod
    @ledger_operation
    def all_purchases(limit=None):
        """Every ledger row, newest first, with purchaser and recorder joined."""
        queryset = SharePurchase.objects.with_people()
        if limit is not None:
            queryset = queryset[:limit]
        return list(queryset)

    @staticmethod
    @ledger_operation
    def stale_month_buckets():
        """Rows whose stored month differs from the UTC month of purchase_date."""
        return [
            purchase
            for purchase in SharePurchase.objects.all()
            if purchase.month != month_bucket(purchase.purchase_date)
        ]
