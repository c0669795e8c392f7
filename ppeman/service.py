"""
Inventory Service — The single public interface for all inventory operations.

Usage:
    from ppeman import inventory, InventoryError

    inventory.update_stock(station.pk, gloves.pk, 12, 'SUBTRACT', actor='42')
    inventory.bulk_restock(station.pk, 50)
    inventory.active_alerts(limit=20)
"""

from typing import Any, Iterable

from ppeman.db import with_database_retry
from ppeman.models.alert import InventoryAlert
from ppeman.models.enums import StockStatus
from ppeman.models.inventory import InventoryRecord
from ppeman.services.alerts import AlertManager
from ppeman.services.bulk import BulkOperator, BulkRestockReport, BulkRestockResult
from ppeman.services.ledger import StockLedger, StockMutationResult
from ppeman.services.queries import InventoryQueries, InventorySnapshot
from ppeman.thresholds import evaluate


class Inventory:
    """
    Single interface for all inventory operations.

    Parameter convention: (station_id, item_id, quantity, ..., actor)

    Every entry point waits for the database to accept connections
    (bounded retry) before running. Business errors are never retried.

    IMPORTANT: All state-changing methods use atomic transactions
    with row locking. See the service class docstrings.
    """

    # ══════════════════════════════════════════════════════════════
    # CORE: MUTATIONS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def update_stock(cls, station_id, item_id, quantity: int, operation: str,
                     actor: str | None = None) -> StockMutationResult:
        """Add or subtract stock. See StockLedger.apply_mutation."""
        return with_database_retry(
            lambda: StockLedger.apply_mutation(station_id, item_id, quantity, operation, actor)
        )

    @classmethod
    def update_thresholds(cls, station_id, item_id, min_threshold: int,
                          critical_threshold: int, actor: str | None = None) -> InventoryRecord:
        return with_database_retry(
            lambda: AlertManager.update_thresholds(
                station_id, item_id, min_threshold, critical_threshold, actor,
            )
        )

    @classmethod
    def bulk_update_thresholds(cls, updates: Iterable[dict[str, Any]],
                               actor: str | None = None) -> list[dict[str, Any]]:
        return with_database_retry(
            lambda: AlertManager.bulk_update_thresholds(updates, actor)
        )

    @classmethod
    def acknowledge_alert(cls, alert_id, actor: str | None = None) -> InventoryAlert:
        return with_database_retry(
            lambda: AlertManager.acknowledge_alert(alert_id, actor)
        )

    @classmethod
    def bulk_restock(cls, station_id, quantity: int,
                     actor: str | None = None) -> BulkRestockResult:
        """Set every item of a station to `quantity`. See BulkOperator."""
        return with_database_retry(
            lambda: BulkOperator.bulk_restock(station_id, quantity, actor)
        )

    @classmethod
    def bulk_restock_all_stations(cls, quantity: int,
                                  actor: str | None = None) -> BulkRestockReport:
        return with_database_retry(
            lambda: BulkOperator.bulk_restock_all_stations(quantity, actor)
        )

    # ══════════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def inventory_with_alerts(cls, station_id=None) -> list[InventorySnapshot]:
        return with_database_retry(
            lambda: InventoryQueries.inventory_with_alerts(station_id)
        )

    @classmethod
    def active_alerts(cls, limit: int | None = None) -> list[InventoryAlert]:
        return with_database_retry(lambda: InventoryQueries.active_alerts(limit))

    @classmethod
    def inventory_stats(cls) -> dict:
        return with_database_retry(InventoryQueries.inventory_stats)

    @classmethod
    def evaluate(cls, current_stock: int, min_threshold: int,
                 critical_threshold: int) -> StockStatus:
        """Pure threshold evaluation; touches no database."""
        return evaluate(current_stock, min_threshold, critical_threshold)
