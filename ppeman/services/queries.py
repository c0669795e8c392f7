"""
Inventory queries — read-only operations.

All methods are classmethod on InventoryQueries and use no locking.
"""

from dataclasses import dataclass, field

from django.db.models import Avg, Count, F, Q

from ppeman.conf import ppeman_settings
from ppeman.models.alert import InventoryAlert
from ppeman.models.enums import AlertSeverity, AlertStatus, StockStatus
from ppeman.models.inventory import InventoryRecord
from ppeman.thresholds import evaluate

ALERT_LEVEL_NONE = 'NONE'


@dataclass(frozen=True)
class InventorySnapshot:
    """One inventory record with its evaluated status and open alerts."""

    record: InventoryRecord
    stock_status: StockStatus
    active_alerts: list[InventoryAlert] = field(default_factory=list)

    @property
    def alert_level(self) -> str:
        severities = {alert.severity for alert in self.active_alerts}
        if AlertSeverity.CRITICAL in severities:
            return AlertSeverity.CRITICAL.value
        if AlertSeverity.WARNING in severities:
            return AlertSeverity.WARNING.value
        return ALERT_LEVEL_NONE


class InventoryQueries:
    """Read-only inventory query methods."""

    @classmethod
    def inventory_with_alerts(cls, station_id=None) -> list[InventorySnapshot]:
        """
        Inventory records with their stock status and ACTIVE alerts.

        Args:
            station_id: Restrict to one station (None = all stations)

        Returns:
            Snapshots ordered by current stock ascending
        """
        records = (
            InventoryRecord.objects
            .select_related('station', 'item')
            .order_by('current_stock', 'station__name', 'item__name')
        )
        if station_id is not None:
            records = records.at_station(station_id)
        records = list(records)

        alerts = InventoryAlert.objects.active().filter(
            station_id__in={r.station_id for r in records},
            item_id__in={r.item_id for r in records},
        ).order_by('-created_at')
        by_pair: dict[tuple[int, int], list[InventoryAlert]] = {}
        for alert in alerts:
            by_pair.setdefault((alert.station_id, alert.item_id), []).append(alert)

        return [
            InventorySnapshot(
                record=record,
                stock_status=evaluate(
                    record.current_stock, record.min_threshold, record.critical_threshold,
                ),
                active_alerts=by_pair.get((record.station_id, record.item_id), []),
            )
            for record in records
        ]

    @classmethod
    def active_alerts(cls, limit: int | None = None) -> list[InventoryAlert]:
        """ACTIVE alerts, CRITICAL first, newest first within a severity."""
        limit = limit or ppeman_settings.ALERTS_LIMIT
        return list(
            InventoryAlert.objects.active()
            .select_related('station', 'item')
            .by_urgency()[:limit]
        )

    @classmethod
    def inventory_stats(cls) -> dict:
        """
        Dashboard totals.

        Returns:
            dict with total_items, low_stock_items, critical_stock_items,
            total_alerts, critical_alerts and average_stock
        """
        records = InventoryRecord.objects.aggregate(
            total_items=Count('pk'),
            critical_stock_items=Count(
                'pk', filter=Q(current_stock__lte=F('critical_threshold')),
            ),
            low_stock_items=Count(
                'pk',
                filter=Q(current_stock__lte=F('min_threshold'))
                & Q(current_stock__gt=F('critical_threshold')),
            ),
            average_stock=Avg('current_stock'),
        )
        alerts = InventoryAlert.objects.filter(status=AlertStatus.ACTIVE).aggregate(
            total_alerts=Count('pk'),
            critical_alerts=Count('pk', filter=Q(severity=AlertSeverity.CRITICAL)),
        )
        average = records['average_stock']
        return {
            'total_items': records['total_items'],
            'low_stock_items': records['low_stock_items'],
            'critical_stock_items': records['critical_stock_items'],
            'total_alerts': alerts['total_alerts'],
            'critical_alerts': alerts['critical_alerts'],
            'average_stock': round(float(average), 2) if average is not None else 0,
        }
