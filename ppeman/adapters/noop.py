"""
Noop adapters — stubs for development and testing.

Usage in settings.py:
    PPEMAN = {
        "NOTIFIER": "ppeman.adapters.noop.NoopStockAlertNotifier",
        "AUDIT_LOGGER": "ppeman.adapters.noop.NoopAuditLogger",
    }

WARNING: Do NOT use in production. Alerts go nowhere and nothing is
audited.
"""

from __future__ import annotations

import logging

from ppeman.protocols.audit import AuditRecord
from ppeman.protocols.notifications import StockAlertNotice

logger = logging.getLogger(__name__)


class NoopStockAlertNotifier:
    """Logs the notice and reports it as not delivered."""

    def send_stock_alert(self, notice: StockAlertNotice, recipients: list[str]) -> bool:
        logger.debug("Noop notifier skipped alert %s", notice.alert_id)
        return False


class NoopAuditLogger:
    """Discards audit records."""

    def log_action(self, record: AuditRecord) -> None:
        return None
