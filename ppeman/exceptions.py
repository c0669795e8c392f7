"""
Exceptions for Ppeman.

Every error carries a structured code for programmatic handling and a
kind (the class) that maps to an HTTP status.
"""

from typing import Any


class BaseError(Exception):
    """
    Structured exception base.

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class InventoryError(BaseError):
    """
    Base for all inventory business errors.

    Usage:
        try:
            inventory.update_stock(station.pk, item.pk, 10, 'SUBTRACT')
        except InventoryError as e:
            if e.code == 'INSUFFICIENT_STOCK':
                print(f"Only {e.data['current_stock']} left")
    """

    http_status = 400

    _default_messages = {
        'INVALID_QUANTITY': 'Quantity must be a positive integer',
        'INVALID_OPERATION': 'Invalid operation. Must be ADD or SUBTRACT',
        'INVALID_THRESHOLDS': 'Critical threshold must be less than minimum threshold',
        'MISSING_FIELD': 'Missing required fields',
        'INVALID_FIELD': 'Invalid field value',
        'INVENTORY_NOT_FOUND': 'Inventory record not found',
        'STATION_NOT_FOUND': 'Station not found',
        'ALERT_NOT_FOUND': 'Alert not found',
        'NO_PPE_ITEMS': 'No PPE items found in system',
        'NO_STATIONS': 'No stations found',
        'INSUFFICIENT_STOCK': 'Insufficient stock',
        'ALERT_RESOLVED': 'Alert is already resolved',
        'DATABASE_NOT_READY': 'Database not initialized. Please wait for system startup to complete.',
    }

    @property
    def kind(self) -> str:
        return type(self).__name__

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'error': self.kind,
            'code': self.code,
            'message': self.message,
            'data': {
                k: str(v) if not isinstance(v, (int, float, bool, type(None))) else v
                for k, v in self.data.items()
            },
        }


class ValidationError(InventoryError):
    """Bad input, rejected before any write."""

    http_status = 400


class NotFoundError(InventoryError):
    """Referenced station, inventory record or alert does not exist."""

    http_status = 404


class InsufficientStockError(InventoryError):
    """SUBTRACT would take stock below zero."""

    http_status = 409

    def __init__(self, code: str = 'INSUFFICIENT_STOCK', message: str | None = None, **data: Any):
        super().__init__(code, message, **data)


class InvalidStateError(InventoryError):
    """Status transition not allowed from the current state."""

    http_status = 409


class DatabaseNotReadyError(InventoryError):
    """Database connection is not available yet (startup race)."""

    http_status = 503

    def __init__(self, code: str = 'DATABASE_NOT_READY', message: str | None = None, **data: Any):
        super().__init__(code, message, **data)
