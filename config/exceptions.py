"""
Project-wide DRF exception handler.

Every API error leaves the server in the same envelope the success
responses use::

    {"success": false, "message": "...", "errors": ["...", ...]}

Serializer errors are flattened into ``"field: message"`` strings so
clients can show them as a plain list.
"""

from rest_framework import status
from rest_framework.views import exception_handler

from apps.shares.exceptions import LedgerUnavailableError


def _flatten_errors(detail, prefix=''):
    """Turn nested DRF error details into a flat list of strings."""
    if isinstance(detail, dict):
        messages = []
        for field, value in detail.items():
            field_prefix = prefix if field == 'non_field_errors' else f'{field}: '
            messages.extend(_flatten_errors(value, field_prefix))
        return messages
    if isinstance(detail, (list, tuple)):
        messages = []
        for item in detail:
            messages.extend(_flatten_errors(item, prefix))
        return messages
    return [f'{prefix}{detail}']


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is None:
        # Unhandled errors propagate to Django's 500 handler
        return None

    if isinstance(response.data, dict) and 'detail' in response.data:
        message = str(response.data['detail'])
        errors = [message]
    else:
        errors = _flatten_errors(response.data)
        if response.status_code == status.HTTP_400_BAD_REQUEST:
            message = 'Validation failed'
        else:
            message = errors[0] if errors else 'Request failed'

    if isinstance(exc, LedgerUnavailableError):
        response['Retry-After'] = str(exc.retry_after)

    response.data = {
        'success': False,
        'message': message,
        'errors': errors,
    }
    return response
