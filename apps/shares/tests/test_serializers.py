import pytest
from datetime import datetime, timezone
from decimal import Decimal
from apps.shares.serializers import (
    RecordPurchaseInputSerializer,
    MonthStatisticsSerializer,
    MonthlyDistributionSerializer,
)


class TestRecordPurchaseInputSerializer:

    def test_maps_camel_case_to_service_arguments(self):
        serializer = RecordPurchaseInputSerializer(data={
            'userId': 'abc',
            'quantity': '2.5',
            'pricePerShare': 10,
            'paymentMethod': 'bank transfer',
            'purchaseDate': '2025-03-15T10:00:00Z',
            'totalAmount': None,
        })

        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data == {
            'user_id': 'abc',
            'quantity': Decimal('2.5'),
            'price_per_share': Decimal('10'),
            'payment_method': 'bank transfer',
            'purchase_date': datetime(2025, 3, 15, 10, 0, tzinfo=timezone.utc),
            'total_amount': None,
            'notes': '',
        }

    def test_optional_fields_omitted(self):
        serializer = RecordPurchaseInputSerializer(data={
            'userId': 'abc',
            'quantity': 1,
            'pricePerShare': 1,
            'paymentMethod': 'cash',
        })

        assert serializer.is_valid()
        assert 'purchase_date' not in serializer.validated_data
        assert 'total_amount' not in serializer.validated_data

    def test_rejects_non_numeric_quantity(self):
        serializer = RecordPurchaseInputSerializer(data={
            'userId': 'abc',
            'quantity': 'lots',
            'pricePerShare': 1,
            'paymentMethod': 'cash',
        })

        assert not serializer.is_valid()
        assert 'quantity' in serializer.errors


class TestOutputRounding:

    def test_money_rounds_half_up_to_cents(self):
        data = MonthStatisticsSerializer({
            'total_shares': Decimal('3.33335'),
            'total_value': Decimal('10.125'),
            'average_price': Decimal('10.005'),
            'transaction_count': 3,
        }).data

        assert data['totalShares'] == Decimal('3.3334')
        assert data['totalValue'] == Decimal('10.13')
        assert data['averagePrice'] == Decimal('10.01')
        assert data['transactionCount'] == 3

    def test_zero_renders_as_number(self):
        data = MonthlyDistributionSerializer({
            'month': '2025-03',
            'shares': Decimal('0'),
            'value': Decimal('0'),
        }).data

        assert isinstance(data['value'], Decimal)
        assert data['value'] == 0
