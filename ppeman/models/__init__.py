"""
Ppeman Models.

Core models for PPE inventory:
- Station: Where PPE is dispensed
- PPEItem: What is stocked
- InventoryRecord: Stock of one item at one station, with thresholds
- InventoryAlert: Threshold breach lifecycle
- AuditEntry: Trail of inventory actions
- NotificationRecipient: Roster for alert notifications
"""

from ppeman.models.alert import InventoryAlert
from ppeman.models.audit import AuditEntry
from ppeman.models.enums import (
    AlertSeverity,
    AlertStatus,
    AlertType,
    StockOperation,
    StockStatus,
)
from ppeman.models.inventory import InventoryRecord
from ppeman.models.recipient import NotificationRecipient
from ppeman.models.station import PPEItem, Station

__all__ = [
    'AlertSeverity',
    'AlertStatus',
    'AlertType',
    'StockOperation',
    'StockStatus',
    'Station',
    'PPEItem',
    'InventoryRecord',
    'InventoryAlert',
    'AuditEntry',
    'NotificationRecipient',
]
