"""Month bucket keys ('YYYY-MM', UTC) shared by the writer and the readers."""

from datetime import date, datetime, time, timezone as dt_timezone

from django.utils import timezone

from .exceptions import ShareValidationError


MIN_YEAR = 2000


def _format_key(year, month):
    return f'{year:04d}-{month:02d}'


def as_utc(value):
    """
    Normalise a purchase date to an aware UTC datetime.

    Plain dates are midnight UTC and naive datetimes are read as UTC.
    """
    if isinstance(value, datetime):
        if timezone.is_naive(value):
            return value.replace(tzinfo=dt_timezone.utc)
        return value.astimezone(dt_timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=dt_timezone.utc)
    raise TypeError(f'Expected date or datetime, got {type(value).__name__}')


def month_bucket(value):
    """Return the 'YYYY-MM' bucket of a date or datetime, in UTC."""
    moment = as_utc(value)
    return _format_key(moment.year, moment.month)


def month_key(month, year):
    """
    Build a bucket key from a calendar month and year.

    Raises:
        ShareValidationError: month outside 1..12 or year outside
            2000..(current UTC year + 1).
    """
    errors = []
    max_year = timezone.now().astimezone(dt_timezone.utc).year + 1

    try:
        month = int(month)
        if not 1 <= month <= 12:
            errors.append('Month must be between 1 and 12')
    except (TypeError, ValueError):
        errors.append('Month must be an integer')

    try:
        year = int(year)
        if not MIN_YEAR <= year <= max_year:
            errors.append(f'Year must be between {MIN_YEAR} and {max_year}')
    except (TypeError, ValueError):
        errors.append('Year must be an integer')

    if errors:
        raise ShareValidationError(errors)
    return _format_key(year, month)
