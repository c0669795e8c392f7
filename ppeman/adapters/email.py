"""
Email Stock Alert Notifier — delivers alerts through Django's mail API.

Usage in settings.py:
    PPEMAN = {
        "NOTIFIER": "ppeman.adapters.email.EmailStockAlertNotifier",
        "ALERT_FROM_EMAIL": "ppe-alerts@example.com",
    }

Transport (SMTP, console, locmem) is whatever EMAIL_BACKEND says.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.core.mail import send_mail
from django.utils import timezone

from ppeman.conf import ppeman_settings
from ppeman.protocols.notifications import StockAlertNotice

logger = logging.getLogger(__name__)


def build_subject(notice: StockAlertNotice) -> str:
    level = "CRITICAL" if notice.is_critical else "LOW"
    return f"{level} Stock Alert - {notice.item_name}"


def build_body(notice: StockAlertNotice) -> str:
    return "\n".join([
        f"{notice.item_name} requires attention.",
        "",
        f"Item:          {notice.item_name} ({notice.item_category})",
        f"Station:       {notice.station_name}",
        f"Location:      {notice.station_location}",
        f"Current stock: {notice.current_stock} units",
        f"Threshold:     {notice.threshold_value} units",
        f"Severity:      {notice.severity}",
        f"Alert time:    {timezone.localtime():%Y-%m-%d %H:%M %Z}",
        "",
        "Please restock this item as soon as possible.",
    ])


class EmailStockAlertNotifier:
    """Sends one plain-text mail per alert to the whole roster."""

    def send_stock_alert(self, notice: StockAlertNotice, recipients: list[str]) -> bool:
        if not recipients:
            logger.info(
                "inventory.alert.no_recipients",
                extra={"alert_id": notice.alert_id},
            )
            return False

        from_email = ppeman_settings.ALERT_FROM_EMAIL or settings.DEFAULT_FROM_EMAIL
        send_mail(
            subject=build_subject(notice),
            message=build_body(notice),
            from_email=from_email,
            recipient_list=recipients,
            fail_silently=False,
        )
        logger.info(
            "inventory.alert.mailed",
            extra={"alert_id": notice.alert_id, "recipients": len(recipients)},
        )
        return True
