"""
Inventory services — modular organization of inventory operations.

Re-exports the service classes:
    from ppeman.services import StockLedger, AlertManager, BulkOperator, InventoryQueries
"""

from ppeman.services.alerts import AlertManager
from ppeman.services.bulk import BulkOperator
from ppeman.services.ledger import StockLedger
from ppeman.services.queries import InventoryQueries

__all__ = [
    'StockLedger',
    'AlertManager',
    'BulkOperator',
    'InventoryQueries',
]
