"""
Input checks shared by the inventory services.

Services take plain ints; string parsing belongs to the HTTP layer.
"""

from ppeman.exceptions import ValidationError

# Largest value a PositiveIntegerField holds on every supported backend.
MAX_STOCK_VALUE = 2147483647


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def require_positive_int(value, field: str, code: str = 'INVALID_QUANTITY') -> int:
    if not _is_int(value) or value <= 0 or value > MAX_STOCK_VALUE:
        raise ValidationError(code, field=field, value=value, max=MAX_STOCK_VALUE)
    return value


def require_non_negative_int(value, field: str, code: str = 'INVALID_FIELD') -> int:
    if not _is_int(value) or value < 0 or value > MAX_STOCK_VALUE:
        raise ValidationError(
            code,
            f"{field} must be an integer between 0 and {MAX_STOCK_VALUE}",
            field=field,
            value=value,
        )
    return value
