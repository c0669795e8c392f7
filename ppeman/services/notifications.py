"""
Alert notifications — fan-out after an alert has been committed.

The Alert Manager registers dispatch_stock_alert() with
transaction.on_commit(); a rolled-back alert is never announced, and a
failing notifier never rolls anything back.
"""

import logging

from ppeman.adapters import get_notifier
from ppeman.models.alert import InventoryAlert
from ppeman.models.recipient import NotificationRecipient
from ppeman.protocols.notifications import StockAlertNotice

logger = logging.getLogger('ppeman')


def get_alert_roster() -> list[str]:
    """Addresses of everyone flagged to receive stock alerts."""
    return list(
        NotificationRecipient.objects.stock_alert_roster()
        .order_by('email')
        .values_list('email', flat=True)
    )


def build_notice(alert: InventoryAlert) -> StockAlertNotice:
    return StockAlertNotice(
        alert_id=str(alert.pk),
        station_name=alert.station.name,
        station_location=alert.station.location,
        item_name=alert.item.name,
        item_category=alert.item.category,
        current_stock=alert.current_stock,
        threshold_value=alert.threshold_value,
        severity=alert.severity,
        alert_type=alert.alert_type,
    )


def dispatch_stock_alert(alert_id) -> bool:
    """
    Notify the roster about a newly created alert. Never raises.

    Marks the alert as sent when the notifier reports delivery.

    Returns:
        True if the notice was delivered
    """
    try:
        alert = InventoryAlert.objects.select_related('station', 'item').get(pk=alert_id)
        notice = build_notice(alert)
        delivered = get_notifier().send_stock_alert(notice, get_alert_roster())
        if delivered:
            InventoryAlert.objects.filter(pk=alert_id).update(alert_sent=True)
    except Exception:
        logger.exception(
            "inventory.alert.notify_failed",
            extra={"alert_id": str(alert_id)},
        )
        return False
    return bool(delivered)
