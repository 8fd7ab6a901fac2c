from django.db import models
from django.core.validators import MinValueValidator
from decimal import Decimal
import uuid


NOTES_MAX_LENGTH = 500


class PaymentMethod(models.TextChoices):
    PAYPAL = 'paypal', 'PayPal'
    BANK_TRANSFER = 'bank transfer', 'Bank transfer'
    SKRILL = 'skrill', 'Skrill'
    CASH = 'cash', 'Cash'
    CHECK = 'check', 'Check'
    OTHER = 'other', 'Other'


class SharePurchaseQuerySet(models.QuerySet):
    """Ledger filters used by the aggregation engine."""

    def for_user(self, user_id):
        return self.filter(user_id=user_id)

    def for_month(self, month_key):
        return self.filter(month=month_key)

    def with_people(self):
        return self.select_related('user', 'recorded_by')


class SharePurchase(models.Model):
    """
    One immutable ledger row: a member bought `quantity` shares.

    `total_amount` and `month` are derived at write time by the ledger
    writer; nothing in the API updates a row afterwards.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Owner (role 'member' at write time)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.PROTECT,
        related_name='share_purchases'
    )

    # Financial details
    quantity = models.DecimalField(
        max_digits=14,
        decimal_places=4,
        validators=[MinValueValidator(Decimal('1'))]
    )
    price_per_share = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    total_amount = models.DecimalField(max_digits=14, decimal_places=2)
    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices
    )

    # Purchase metadata
    purchase_date = models.DateTimeField()
    month = models.CharField(max_length=7, db_index=True)
    notes = models.TextField(blank=True, max_length=NOTES_MAX_LENGTH)

    # Audit
    recorded_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='recorded_share_purchases'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    objects = SharePurchaseQuerySet.as_manager()

    class Meta:
        db_table = 'share_purchases'
        indexes = [
            models.Index(fields=['user', 'purchase_date'], name='share_user_date_idx'),
            models.Index(fields=['month'], name='share_month_idx'),
        ]
        ordering = ['-purchase_date', '-created_at']

    def __str__(self):
        return f"{self.user.get_display_name()} - {self.quantity} shares ({self.month})"
