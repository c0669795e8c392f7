"""
Stock ledger — the single place where incremental stock changes happen.

All methods use transaction.atomic() with row locking.
"""

import logging
from dataclasses import dataclass

from django.db import transaction
from django.utils import timezone

from ppeman.conf import ppeman_settings
from ppeman.exceptions import InsufficientStockError, NotFoundError, ValidationError
from ppeman.models.alert import InventoryAlert
from ppeman.models.enums import StockOperation, StockStatus
from ppeman.models.inventory import InventoryRecord
from ppeman.services.alerts import AlertManager
from ppeman.services.audit import log_action_on_commit
from ppeman.validation import MAX_STOCK_VALUE, require_positive_int

logger = logging.getLogger('ppeman')


@dataclass(frozen=True)
class StockMutationResult:
    """Before/after view of one committed stock mutation."""

    station_id: int
    item_id: int
    previous_stock: int
    new_stock: int
    operation: StockOperation
    quantity: int
    stock_status: StockStatus
    alert_created: InventoryAlert | None = None
    alerts_resolved: int = 0


class StockLedger:
    """State-changing stock mutation methods."""

    @classmethod
    def apply_mutation(cls, station_id, item_id, quantity: int, operation: str,
                       actor: str | None = None) -> StockMutationResult:
        """
        Add to or subtract from the stock of a (station, item) pair.

        The stock write and its alert side effects commit or roll back
        together. The audit entry is written after commit, best effort.

        Raises:
            ValidationError('INVALID_QUANTITY'): If quantity <= 0, or the new
                stock would exceed MAX_STOCK_VALUE
            ValidationError('INVALID_OPERATION'): If operation is not ADD/SUBTRACT
            NotFoundError('INVENTORY_NOT_FOUND'): If the pair has no record
            InsufficientStockError: If SUBTRACT would go below zero

        Concurrency:
            - Runs under transaction.atomic()
            - Uses select_for_update() on the InventoryRecord
            - Reads previous stock after the lock, so two SUBTRACTs on
              the same pair can never both see the same starting value
        """
        actor = actor or ppeman_settings.SYSTEM_ACTOR
        require_positive_int(quantity, 'quantity')
        if operation not in StockOperation.values:
            raise ValidationError('INVALID_OPERATION', operation=operation)
        operation = StockOperation(operation)

        with transaction.atomic():
            try:
                record = InventoryRecord.objects.select_for_update().get(
                    station_id=station_id, item_id=item_id,
                )
            except InventoryRecord.DoesNotExist:
                raise NotFoundError('INVENTORY_NOT_FOUND', station_id=station_id, item_id=item_id)

            previous_stock = record.current_stock
            if operation == StockOperation.ADD:
                new_stock = previous_stock + quantity
            else:
                new_stock = previous_stock - quantity

            if new_stock > MAX_STOCK_VALUE:
                raise ValidationError(
                    'INVALID_QUANTITY',
                    f"Stock cannot exceed {MAX_STOCK_VALUE}",
                    current_stock=previous_stock,
                    requested=quantity,
                )
            if new_stock < 0:
                raise InsufficientStockError(
                    current_stock=previous_stock,
                    requested=quantity,
                )

            record.current_stock = new_stock
            update_fields = ['current_stock', 'updated_at']
            if operation == StockOperation.ADD:
                record.last_restocked = timezone.now()
                update_fields.append('last_restocked')
            record.save(update_fields=update_fields)

            outcome = AlertManager.on_stock_changed(record, new_stock, actor)

            log_action_on_commit(
                actor, 'UPDATE_STOCK', 'INVENTORY', record.resource_id,
                old_values={'stock': previous_stock},
                new_values={'stock': new_stock, 'operation': operation.value, 'quantityChange': quantity},
            )

        logger.info(
            "inventory.stock.update",
            extra={
                "station_id": station_id,
                "item_id": item_id,
                "operation": operation.value,
                "qty": quantity,
                "previous_stock": previous_stock,
                "new_stock": new_stock,
                "stock_status": outcome.status.value,
            },
        )
        return StockMutationResult(
            station_id=record.station_id,
            item_id=record.item_id,
            previous_stock=previous_stock,
            new_stock=new_stock,
            operation=operation,
            quantity=quantity,
            stock_status=outcome.status,
            alert_created=outcome.created,
            alerts_resolved=outcome.resolved,
        )
