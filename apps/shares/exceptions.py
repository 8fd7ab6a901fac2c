"""
Domain exceptions for shares app.

Every error raised by the ledger writer, aggregation engine and query
facade derives from SharesServiceError, which is a DRF APIException so
views can let them propagate to the project exception handler.
"""
from rest_framework.exceptions import APIException


class SharesServiceError(APIException):
    """Base exception for share ledger errors."""
    status_code = 500
    default_detail = 'Share ledger error.'
    default_code = 'shares_error'


class ShareValidationError(SharesServiceError):
    """One or more input rules were violated. `detail` is a list of messages."""
    status_code = 400
    default_detail = 'Validation failed.'
    default_code = 'validation_error'

    def __init__(self, errors=None, code=None):
        if isinstance(errors, str):
            errors = [errors]
        super().__init__(errors or [self.default_detail], code)

    @property
    def messages(self):
        return [str(message) for message in self.detail]


class MemberNotFoundError(SharesServiceError):
    """Referenced user does not exist or is not a member."""
    status_code = 404
    default_detail = 'Member not found or invalid role.'
    default_code = 'member_not_found'


class ShareAccessForbiddenError(SharesServiceError):
    """Caller's role does not allow the operation."""
    status_code = 403
    default_detail = 'You do not have permission to access these shares.'
    default_code = 'forbidden'


class LedgerUnavailableError(SharesServiceError):
    """The ledger store could not be reached. Safe to retry."""
    status_code = 503
    default_detail = 'Share ledger is temporarily unavailable. Please retry.'
    default_code = 'store_unavailable'
    retry_after = 5
