"""
Ppeman Protocols.

Defines interfaces for external system integration.
"""

from ppeman.protocols.audit import AuditLogger, AuditRecord
from ppeman.protocols.notifications import StockAlertNotice, StockAlertNotifier

__all__ = [
    "AuditLogger",
    "AuditRecord",
    "StockAlertNotice",
    "StockAlertNotifier",
]
