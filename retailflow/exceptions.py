"""
Exceptions for RetailFlow.

All errors carry a structured code for programmatic handling.
"""

from decimal import Decimal
from typing import Any


class BaseError(Exception):
    """
    Base structured exception.

    Usage:
        raise StockError('INVALID_QUANTITY', requested=qty)

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(f"[{code}] {self.message}")

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: str(v) if isinstance(v, Decimal) else v
                for k, v in self.data.items()
            }
        }


class StockError(BaseError):
    """
    Structured exception for ledger, transfer and assignment operations.

    Usage:
        try:
            plan.commit(user=request.user)
        except StockError as e:
            if e.code == 'ROW_FAILED':
                print(f"Committed rows: {e.committed}")
    """

    _default_messages = {
        'INVALID_QUANTITY': 'Invalid quantity',
        'INSUFFICIENT_QUANTITY': 'Not enough stock at this location',
        'REASON_REQUIRED': 'A reason is required',
        'PRODUCT_NOT_FOUND': 'Product not found',
        'STORE_NOT_FOUND': 'Store not found',
        'HUB_NOT_CONFIGURED': 'No central hub is configured',
        'HUB_PROTECTED': 'The central hub cannot be deleted',
        'HUB_CONFLICT': 'Another store is already the central hub',
        'SAME_LOCATION': 'Source and destination must differ',
        'INVALID_PLAN': 'Assignment cannot be committed',
        'ROW_FAILED': 'Assignment stopped at a failing row',
    }

    @property
    def available(self) -> Decimal:
        """Shortcut for data['available']."""
        return self.data.get('available', Decimal('0'))

    @property
    def requested(self) -> Decimal:
        """Shortcut for data['requested']."""
        return self.data.get('requested', Decimal('0'))

    @property
    def committed(self) -> list[int]:
        """Row indices already committed when an assignment failed."""
        return self.data.get('committed', [])


class RequestError(BaseError):
    """Errors raised by the supply request workflow."""

    _default_messages = {
        'EMPTY_REQUEST': 'A request needs at least one item or an image',
        'INVALID_STATUS': 'Invalid status for this operation',
        'REQUEST_NOT_FOUND': 'Request not found',
    }


class AccessError(BaseError):
    """Authentication and role checks."""

    _default_messages = {
        'INVALID_CREDENTIALS': 'Invalid username or password',
        'INACTIVE_USER': 'User is inactive',
        'PERMISSION_DENIED': 'Not enough permissions',
        'NO_SESSION': 'No active session',
    }


class RecordError(BaseError):
    """Sales, purchases, expenses and wastage bookkeeping."""

    _default_messages = {
        'INVALID_AMOUNT': 'Amount must be greater than zero',
        'EMPTY_REPORT': 'A wastage report needs at least one line',
    }


class PayloadError(BaseError):
    """Inbound data that does not match the expected shape."""

    _default_messages = {
        'INVALID_PAYLOAD': 'Malformed payload',
    }
