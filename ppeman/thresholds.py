"""
Threshold evaluation.

Maps a stock level to its threshold band. Two nested bands:
    stock <= critical          → CRITICAL
    critical < stock <= min    → LOW
    stock > min                → GOOD

Examples:
    evaluate(8, min_threshold=10, critical_threshold=5)   # LOW
    evaluate(4, min_threshold=10, critical_threshold=5)   # CRITICAL
    evaluate(11, min_threshold=10, critical_threshold=5)  # GOOD
"""

from ppeman.models.enums import AlertSeverity, AlertType, StockStatus


def evaluate(current_stock: int, min_threshold: int, critical_threshold: int) -> StockStatus:
    """
    Threshold band for a stock level.

    Does not check critical_threshold < min_threshold. With inverted
    thresholds the CRITICAL test still runs first, so the result is
    defined, just not meaningful.
    """
    if current_stock <= critical_threshold:
        return StockStatus.CRITICAL
    if current_stock <= min_threshold:
        return StockStatus.LOW
    return StockStatus.GOOD


def alert_kind_for(status: StockStatus) -> tuple[AlertType, AlertSeverity] | None:
    """Alert type and severity raised by a status (None for GOOD)."""
    if status == StockStatus.CRITICAL:
        return AlertType.CRITICAL_LOW, AlertSeverity.CRITICAL
    if status == StockStatus.LOW:
        return AlertType.LOW_STOCK, AlertSeverity.WARNING
    return None


def threshold_for(alert_type: AlertType, min_threshold: int, critical_threshold: int) -> int:
    """Threshold value an alert of this type has crossed."""
    if alert_type == AlertType.CRITICAL_LOW:
        return critical_threshold
    return min_threshold
