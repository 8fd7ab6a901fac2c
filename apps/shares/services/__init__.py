"""Services for share ledger business logic."""

from ..exceptions import (
    SharesServiceError,
    ShareValidationError,
    MemberNotFoundError,
    ShareAccessForbiddenError,
    LedgerUnavailableError,
)
from .aggregation import ShareAggregation
from .ledger_writer import record_purchase, reconcile_month_buckets, round_money
from .facade import Principal, ShareQueryFacade

__all__ = [
    # Exceptions
    'SharesServiceError',
    'ShareValidationError',
    'MemberNotFoundError',
    'ShareAccessForbiddenError',
    'LedgerUnavailableError',
    # Services
    'ShareAggregation',
    'record_purchase',
    'reconcile_month_buckets',
    'round_money',
    'Principal',
    'ShareQueryFacade',
]
