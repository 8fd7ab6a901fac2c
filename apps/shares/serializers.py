"""
Serializers for shares app.

This module contains:
1. Input serializers - request body and query parameter parsing
2. Output serializers - camelCase response shapes

Input serializers only check types and presence; the ledger writer owns
the business rules (quantity >= 1, positive price, payment method) so
every rule violation is reported together.

Output money fields are rounded half-up to 2 decimals and quantities to
4 decimals, rendered as JSON numbers.
"""

from decimal import ROUND_HALF_UP

from rest_framework import serializers

from .models import SharePurchase


class MoneyField(serializers.DecimalField):
    """Read-only amount rounded half-up to cents."""

    def __init__(self, **kwargs):
        kwargs.setdefault('max_digits', None)
        kwargs.setdefault('decimal_places', 2)
        kwargs.setdefault('coerce_to_string', False)
        kwargs.setdefault('rounding', ROUND_HALF_UP)
        kwargs.setdefault('read_only', True)
        super().__init__(**kwargs)


class QuantityField(MoneyField):
    """Read-only share quantity at 4 decimals."""

    def __init__(self, **kwargs):
        kwargs.setdefault('decimal_places', 4)
        super().__init__(**kwargs)


# =============================================================================
# Input Serializers
# =============================================================================

class RecordPurchaseInputSerializer(serializers.Serializer):
    """
    Body of POST /api/shares/.

    Fields:
        userId (str): Member receiving the shares
        quantity (decimal): Number of shares, up to 4 decimal places
        pricePerShare (decimal): Price of one share, up to 2 decimal places
        paymentMethod (str): paypal, bank transfer, skrill, cash, check or other
        purchaseDate (datetime): Optional, defaults to now
        totalAmount (decimal): Optional override of quantity * pricePerShare, 2 decimal places
        notes (str): Optional

    Precision and column size limits are checked by the ledger writer.
    """

    userId = serializers.CharField(source='user_id')
    quantity = serializers.DecimalField(max_digits=None, decimal_places=None)
    pricePerShare = serializers.DecimalField(
        max_digits=None, decimal_places=None, source='price_per_share'
    )
    paymentMethod = serializers.CharField(source='payment_method')
    purchaseDate = serializers.DateTimeField(
        source='purchase_date', required=False, allow_null=True
    )
    totalAmount = serializers.DecimalField(
        max_digits=None, decimal_places=None,
        source='total_amount', required=False, allow_null=True
    )
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class ShareListQuerySerializer(serializers.Serializer):
    """
    Validate query parameters for the ledger listing.

    Query Parameters:
        limit (int): Return at most this many purchases (1-1000)
    """

    limit = serializers.IntegerField(min_value=1, max_value=1000, required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class PersonSerializer(serializers.Serializer):
    """Purchaser or recorder reference."""
    id = serializers.UUIDField()
    name = serializers.CharField()
    email = serializers.EmailField()


class SharePurchaseSerializer(serializers.ModelSerializer):
    """Full ledger row."""

    user = PersonSerializer(read_only=True)
    quantity = QuantityField()
    pricePerShare = MoneyField(source='price_per_share')
    totalAmount = MoneyField(source='total_amount')
    paymentMethod = serializers.CharField(source='payment_method', read_only=True)
    purchaseDate = serializers.DateTimeField(source='purchase_date', read_only=True)
    recordedBy = PersonSerializer(source='recorded_by', read_only=True, allow_null=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = SharePurchase
        fields = [
            'id',
            'user',
            'quantity',
            'pricePerShare',
            'totalAmount',
            'paymentMethod',
            'purchaseDate',
            'month',
            'notes',
            'recordedBy',
            'createdAt',
        ]
        read_only_fields = fields


class MemberSharesSerializer(serializers.Serializer):
    """A member's own purchases."""
    totalShares = QuantityField(source='total_shares')
    count = serializers.IntegerField()
    data = SharePurchaseSerializer(source='purchases', many=True)


class MemberSharesByIdSerializer(MemberSharesSerializer):
    """A member's purchases as seen by an admin."""
    memberId = serializers.UUIDField(source='member_id')
    memberName = serializers.CharField(source='member_name', allow_null=True)


class MonthlyPurchaseSerializer(serializers.Serializer):
    """Reduced purchase row inside a monthly rollup."""
    id = serializers.UUIDField()
    quantity = QuantityField()
    pricePerShare = MoneyField(source='price_per_share')
    totalAmount = MoneyField(source='total_amount')
    purchaseDate = serializers.DateTimeField(source='purchase_date')


class MonthlyRollupSerializer(serializers.Serializer):
    """One month of a member's purchases."""
    month = serializers.CharField()
    totalShares = QuantityField(source='total_shares')
    totalAmount = MoneyField(source='total_amount')
    purchases = MonthlyPurchaseSerializer(many=True)


class MonthlyDistributionSerializer(serializers.Serializer):
    month = serializers.CharField()
    shares = QuantityField()
    value = MoneyField()


class TopMemberSerializer(serializers.Serializer):
    userId = serializers.UUIDField(source='user_id')
    name = serializers.CharField(allow_null=True)
    email = serializers.EmailField(allow_null=True)
    totalShares = QuantityField(source='total_shares')


class GlobalStatsSerializer(serializers.Serializer):
    """Organisation-wide totals for the admin dashboard."""
    totalShares = QuantityField(source='total_shares')
    totalValue = MoneyField(source='total_value')
    monthlyDistribution = MonthlyDistributionSerializer(source='monthly_distribution', many=True)
    topMembers = TopMemberSerializer(source='top_members', many=True)


class MonthStatisticsSerializer(serializers.Serializer):
    totalShares = QuantityField(source='total_shares')
    totalValue = MoneyField(source='total_value')
    averagePrice = MoneyField(source='average_price')
    transactionCount = serializers.IntegerField(source='transaction_count')


class TopContributorSerializer(serializers.Serializer):
    userId = serializers.UUIDField(source='user_id')
    name = serializers.CharField(allow_null=True)
    email = serializers.EmailField(allow_null=True)
    totalShares = QuantityField(source='total_shares')
    totalAmount = MoneyField(source='total_amount')
    transactionCount = serializers.IntegerField(source='transaction_count')


class MonthReportSerializer(serializers.Serializer):
    """Purchases and statistics for one calendar month."""
    month = serializers.IntegerField()
    year = serializers.IntegerField()
    monthString = serializers.CharField(source='month_string')
    shares = SharePurchaseSerializer(many=True)
    statistics = MonthStatisticsSerializer()
    topContributors = TopContributorSerializer(source='top_contributors', many=True)


class AvailableMonthSerializer(serializers.Serializer):
    month = serializers.CharField()
    shareCount = QuantityField(source='share_count')
    transactionCount = serializers.IntegerField(source='transaction_count')


# =============================================================================
# Response envelopes (API documentation)
# =============================================================================

class SharePurchaseResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    data = SharePurchaseSerializer()


class SharePurchaseListResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    count = serializers.IntegerField()
    data = SharePurchaseSerializer(many=True)


class MemberSharesResponseSerializer(MemberSharesSerializer):
    success = serializers.BooleanField()


class MemberSharesByIdResponseSerializer(MemberSharesByIdSerializer):
    success = serializers.BooleanField()


class MonthlyRollupResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    count = serializers.IntegerField()
    data = MonthlyRollupSerializer(many=True)


class GlobalStatsResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    data = GlobalStatsSerializer()


class MonthReportResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    data = MonthReportSerializer()


class AvailableMonthsResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    data = AvailableMonthSerializer(many=True)


class ErrorResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    errors = serializers.ListField(child=serializers.CharField())
