"""
Bulk restock — set every item of a station (or of every station) to an
absolute stock level.

A station is all-or-nothing; across stations, each one succeeds or fails
on its own and the outcome is reported, not raised.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any

from django.db import DatabaseError, transaction
from django.utils import timezone

from ppeman.conf import ppeman_settings
from ppeman.exceptions import InventoryError, NotFoundError
from ppeman.models.inventory import InventoryRecord
from ppeman.models.station import PPEItem, Station
from ppeman.services.alerts import AlertManager
from ppeman.services.audit import log_action_on_commit
from ppeman.validation import require_non_negative_int

logger = logging.getLogger('ppeman')


@dataclass(frozen=True)
class RestockedItem:
    item_id: int
    old_stock: int
    new_stock: int
    difference: int


@dataclass(frozen=True)
class BulkRestockResult:
    """Outcome of restocking one station."""

    station_id: int
    quantity: int
    updated_items: list[RestockedItem]
    initialized: bool = False

    @property
    def message(self) -> str:
        return (
            f"Successfully restocked {len(self.updated_items)} items "
            f"to {self.quantity} units each"
        )


@dataclass(frozen=True)
class StationRestockDetail:
    station_id: int
    station_name: str
    success: bool
    items_restocked: int = 0
    message: str = ''
    error: str = ''


@dataclass
class BulkRestockReport:
    """Aggregate outcome of restocking every station."""

    quantity: int
    total_stations: int = 0
    successful_stations: int = 0
    failed_stations: int = 0
    total_items_restocked: int = 0
    details: list[StationRestockDetail] = field(default_factory=list)

    @property
    def message(self) -> str:
        return (
            f"Bulk restock completed: {self.successful_stations} successful, "
            f"{self.failed_stations} failed"
        )

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data['message'] = self.message
        return data


class BulkOperator:
    """Multi-item and multi-station restock methods."""

    @classmethod
    def bulk_restock(cls, station_id, quantity: int,
                     actor: str | None = None) -> BulkRestockResult:
        """
        Set current_stock = quantity for every item at a station.

        A station without any inventory rows is first provisioned with one
        row per PPE item (stock 0, item default thresholds).

        Raises:
            ValidationError('INVALID_FIELD'): If quantity is not a
                non-negative integer
            NotFoundError('STATION_NOT_FOUND'): If the station doesn't exist
            NotFoundError('NO_PPE_ITEMS'): If auto-initialization finds no items

        Concurrency:
            - Runs under transaction.atomic(), one per station
            - Uses select_for_update() on all of the station's records
            - Alert evaluation per item joins the same transaction
        """
        actor = actor or ppeman_settings.SYSTEM_ACTOR
        require_non_negative_int(quantity, 'quantity')

        with transaction.atomic():
            try:
                station = Station.objects.select_for_update().get(pk=station_id)
            except Station.DoesNotExist:
                raise NotFoundError('STATION_NOT_FOUND', station_id=station_id)

            records = list(
                InventoryRecord.objects.select_for_update()
                .at_station(station.pk)
                .order_by('pk')
            )
            initialized = False
            if not records:
                records = cls.auto_initialize(station)
                initialized = True

            now = timezone.now()
            updated_items = []
            for record in records:
                old_stock = record.current_stock
                record.current_stock = quantity
                record.last_restocked = now
                record.save(update_fields=['current_stock', 'last_restocked', 'updated_at'])

                AlertManager.on_stock_changed(record, quantity, actor)

                updated_items.append(RestockedItem(
                    item_id=record.item_id,
                    old_stock=old_stock,
                    new_stock=quantity,
                    difference=quantity - old_stock,
                ))
                log_action_on_commit(
                    actor, 'BULK_RESTOCK', 'STATION_INVENTORY', record.pk,
                    old_values={'current_stock': old_stock},
                    new_values={'current_stock': quantity},
                    metadata={
                        'station_id': record.station_id,
                        'ppe_item_id': record.item_id,
                        'difference': quantity - old_stock,
                        'auto_initialized': initialized,
                    },
                )

        logger.info(
            "inventory.bulk_restock",
            extra={
                "station_id": station.pk,
                "qty": quantity,
                "items": len(updated_items),
                "auto_initialized": initialized,
            },
        )
        return BulkRestockResult(
            station_id=station.pk,
            quantity=quantity,
            updated_items=updated_items,
            initialized=initialized,
        )

    @classmethod
    def bulk_restock_all_stations(cls, quantity: int,
                                  actor: str | None = None) -> BulkRestockReport:
        """
        Restock every station to `quantity`, one transaction per station.

        A station that fails is reported in details with its error
        message; the others are unaffected.

        Raises:
            ValidationError('INVALID_FIELD'): If quantity is invalid
            NotFoundError('NO_STATIONS'): If there are no stations at all
        """
        actor = actor or ppeman_settings.SYSTEM_ACTOR
        require_non_negative_int(quantity, 'quantity')

        stations = list(Station.objects.order_by('name', 'pk').values_list('pk', 'name'))
        if not stations:
            raise NotFoundError('NO_STATIONS')

        report = BulkRestockReport(quantity=quantity, total_stations=len(stations))
        for station_id, station_name in stations:
            try:
                result = cls.bulk_restock(station_id, quantity, actor)
            except (InventoryError, DatabaseError) as exc:
                report.failed_stations += 1
                report.details.append(StationRestockDetail(
                    station_id=station_id,
                    station_name=station_name,
                    success=False,
                    error=getattr(exc, 'message', None) or str(exc),
                ))
                logger.warning(
                    "inventory.bulk_restock.station_failed",
                    extra={"station_id": station_id, "error": str(exc)},
                )
                continue

            report.successful_stations += 1
            report.total_items_restocked += len(result.updated_items)
            report.details.append(StationRestockDetail(
                station_id=station_id,
                station_name=station_name,
                success=True,
                items_restocked=len(result.updated_items),
                message=result.message,
            ))

        logger.info(
            "inventory.bulk_restock_all",
            extra={
                "qty": quantity,
                "successful": report.successful_stations,
                "failed": report.failed_stations,
            },
        )
        return report

    @classmethod
    def auto_initialize(cls, station: Station) -> list[InventoryRecord]:
        """
        Provision one empty InventoryRecord per PPE item at a station.

        Thresholds come from the item (min) and floor(min / 2) (critical).
        Must run inside the caller's transaction.

        Raises:
            NotFoundError('NO_PPE_ITEMS'): If no PPE items exist
        """
        items = list(PPEItem.objects.order_by('pk'))
        if not items:
            raise NotFoundError('NO_PPE_ITEMS', station_id=station.pk)

        logger.info(
            "inventory.bulk_restock.auto_initialize",
            extra={"station_id": station.pk, "items": len(items)},
        )

        records = []
        for item in items:
            min_threshold = item.min_threshold or ppeman_settings.DEFAULT_MIN_THRESHOLD
            records.append(InventoryRecord.objects.create(
                station=station,
                item=item,
                current_stock=0,
                max_capacity=ppeman_settings.DEFAULT_MAX_CAPACITY,
                min_threshold=min_threshold,
                critical_threshold=min_threshold // 2,
            ))
        return records
