"""
Stock Alert Notification Protocol.

Ppeman defines this protocol; mail, chat or paging integrations implement
it. The notifier is called after the alert has been committed, so a
failure here never touches stock or alert state.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class StockAlertNotice:
    """Everything a notifier needs to describe a new alert."""

    alert_id: str
    station_name: str
    station_location: str
    item_name: str
    item_category: str
    current_stock: int
    threshold_value: int
    severity: str  # "WARNING" | "CRITICAL"
    alert_type: str  # "LOW_STOCK" | "CRITICAL_LOW"

    @property
    def is_critical(self) -> bool:
        return self.severity == "CRITICAL"

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@runtime_checkable
class StockAlertNotifier(Protocol):
    """
    Protocol for alert fan-out.

    Implementations deliver one notice to the given recipients.
    """

    def send_stock_alert(self, notice: StockAlertNotice, recipients: list[str]) -> bool:
        """
        Deliver a stock alert.

        Args:
            notice: Alert details
            recipients: Addresses resolved from the alert roster

        Returns:
            True if the notice was handed to the transport, False if
            delivery was skipped (e.g. nobody to notify).
        """
        ...
