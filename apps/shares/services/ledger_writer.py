"""
Ledger Writer
=============

The only code path that inserts SharePurchase rows.

Functions:
    record_purchase: Validate a purchase intent and insert one ledger row.
    reconcile_month_buckets: Recompute stale `month` keys from `purchase_date`.

Example::

    from decimal import Decimal
    from apps.shares.services import record_purchase

    purchase = record_purchase(
        user_id=member.id,
        quantity=5,
        price_per_share=Decimal('10.00'),
        payment_method='cash',
        recorded_by=admin,
    )
    purchase.total_amount   # Decimal('50.00')
    purchase.month          # '2025-03'
"""

import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.db import transaction
from django.utils import timezone

from ..models import SharePurchase, PaymentMethod, NOTES_MAX_LENGTH
from ..exceptions import ShareValidationError
from ..periods import as_utc, month_bucket
from .aggregation import ShareAggregation
from .store import ledger_operation, get_member


logger = logging.getLogger(__name__)

CENT = Decimal('0.01')


def round_money(value):
    """Round a Decimal amount half-up to 2 decimal places."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _to_decimal(value):
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, float):
        value = repr(value)
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return result if result.is_finite() else None


def _column_limits(field_name):
    field = SharePurchase._meta.get_field(field_name)
    return field.max_digits - field.decimal_places, field.decimal_places


def _check_column_fit(value, field_name, label, errors):
    """Append an error when `value` would not fit its DecimalField column."""
    whole_digits, decimal_places = _column_limits(field_name)
    if abs(value) >= Decimal(10) ** whole_digits:
        errors.append(f'{label} cannot have more than {whole_digits} digits before the decimal point')
        return False
    if value != value.quantize(Decimal(1).scaleb(-decimal_places)):
        errors.append(f'{label} cannot have more than {decimal_places} decimal places')
        return False
    return True


def _validate_purchase(quantity, price_per_share, payment_method, total_amount, notes):
    """Collect every rule violation, returning the cleaned Decimal values."""
    errors = []

    quantity_value = _to_decimal(quantity)
    if quantity_value is None:
        errors.append('Quantity must be a number')
    elif quantity_value < 1:
        errors.append('Quantity must be at least 1')
    elif not _check_column_fit(quantity_value, 'quantity', 'Quantity', errors):
        quantity_value = None

    price_value = _to_decimal(price_per_share)
    if price_value is None:
        errors.append('Price per share must be a number')
    elif price_value <= 0:
        errors.append('Price per share must be a positive number')
    elif not _check_column_fit(price_value, 'price_per_share', 'Price per share', errors):
        price_value = None

    if payment_method not in PaymentMethod.values:
        errors.append(
            f"Invalid payment method. Must be one of: {', '.join(PaymentMethod.values)}"
        )

    total_value = None
    if total_amount is not None:
        total_value = _to_decimal(total_amount)
        if total_value is None:
            errors.append('Total amount must be a number')
        elif total_value <= 0:
            errors.append('Total amount must be a positive number')
        else:
            _check_column_fit(total_value, 'total_amount', 'Total amount', errors)
    elif not errors:
        # The computed total has to fit the same column as a supplied one.
        whole_digits, _ = _column_limits('total_amount')
        if round_money(quantity_value * price_value) >= Decimal(10) ** whole_digits:
            errors.append(
                f'Total amount cannot have more than {whole_digits} digits before the decimal point'
            )

    if notes and len(notes) > NOTES_MAX_LENGTH:
        errors.append(f'Notes cannot be more than {NOTES_MAX_LENGTH} characters')

    if errors:
        raise ShareValidationError(errors)
    return quantity_value, price_value, total_value


@ledger_operation
def record_purchase(
    *,
    user_id,
    quantity,
    price_per_share,
    payment_method,
    recorded_by=None,
    purchase_date=None,
    total_amount=None,
    notes='',
):
    """
    Record a single share purchase for a member.

    Args:
        user_id (UUID | str): Owner of the purchase. Must be a member.
        quantity: Number of shares, at least 1, up to 4 decimal places.
        price_per_share: Positive price of one share, up to 2 decimal places.
        payment_method (str): One of PaymentMethod values.
        recorded_by (User | UUID, optional): Admin recording the purchase.
        purchase_date (datetime | date, optional): Defaults to now. Naive
            values and plain dates are read as UTC.
        total_amount (optional): Caller-supplied total. Stored as given;
            a mismatch against quantity * price_per_share is logged.
        notes (str, optional): Free text, up to 500 characters.

    Returns:
        SharePurchase: The inserted row.

    Raises:
        ShareValidationError: One or more input rules failed (nothing written).
        MemberNotFoundError: user_id is unknown or not a member.
        LedgerUnavailableError: The database could not be reached.
    """
    quantity, price_per_share, total_amount = _validate_purchase(
        quantity, price_per_share, payment_method, total_amount, notes
    )
    member = get_member(user_id)

    purchase_date = as_utc(purchase_date) if purchase_date is not None else timezone.now()
    computed_total = round_money(quantity * price_per_share)

    with transaction.atomic():
        purchase = SharePurchase.objects.create(
            user=member,
            quantity=quantity,
            price_per_share=price_per_share,
            total_amount=total_amount if total_amount is not None else computed_total,
            payment_method=payment_method,
            purchase_date=purchase_date,
            month=month_bucket(purchase_date),
            notes=notes or '',
            recorded_by_id=getattr(recorded_by, 'id', recorded_by),
        )

    if total_amount is not None and total_amount != computed_total:
        logger.warning(
            "Share purchase %s stored with supplied total %s, computed total is %s",
            purchase.id, total_amount, computed_total,
        )

    logger.info(
        "Recorded share purchase %s: user=%s quantity=%s total=%s month=%s",
        purchase.id, member.id, purchase.quantity, purchase.total_amount, purchase.month,
    )
    return purchase


@ledger_operation
def reconcile_month_buckets(dry_run=False):
    """
    Recompute `month` for rows whose purchase_date was corrected in the database.

    Returns:
        list[tuple[SharePurchase, str]]: Each stale row with its old month key.
            On a dry run the rows are left untouched.
    """
    stale = ShareAggregation.stale_month_buckets()
    fixed = []

    with transaction.atomic():
        for purchase in stale:
            old_month = purchase.month
            if not dry_run:
                purchase.month = month_bucket(purchase.purchase_date)
                purchase.save(update_fields=['month'])
                logger.info(
                    "Moved share purchase %s from month %s to %s",
                    purchase.id, old_month, purchase.month,
                )
            fixed.append((purchase, old_month))

    return fixed
