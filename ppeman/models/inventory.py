"""
InventoryRecord model — stock count of one item at one station.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class InventoryRecordQuerySet(models.QuerySet):
    """QuerySet with helper filters for InventoryRecord."""

    def for_pair(self, station_id, item_id):
        return self.filter(station_id=station_id, item_id=item_id)

    def at_station(self, station_id):
        return self.filter(station_id=station_id)


class InventoryRecord(models.Model):
    """
    Stock of a PPE item at a station.

    Rules:
    - Unique per (station, item)
    - current_stock never goes below zero
    - critical_threshold < min_threshold (checked when thresholds change)
    - Stock only changes through the inventory service, under a row lock
    """

    station = models.ForeignKey(
        'ppeman.Station',
        on_delete=models.PROTECT,
        related_name='inventory',
        verbose_name=_('Station'),
    )
    item = models.ForeignKey(
        'ppeman.PPEItem',
        on_delete=models.PROTECT,
        related_name='inventory',
        verbose_name=_('PPE Item'),
    )

    current_stock = models.PositiveIntegerField(
        default=0,
        verbose_name=_('Current stock'),
    )
    min_threshold = models.PositiveIntegerField(
        default=10,
        verbose_name=_('Minimum threshold'),
        help_text=_('LOW alert when stock is at or below this value'),
    )
    critical_threshold = models.PositiveIntegerField(
        default=5,
        verbose_name=_('Critical threshold'),
        help_text=_('CRITICAL alert when stock is at or below this value'),
    )
    max_capacity = models.PositiveIntegerField(
        default=100,
        verbose_name=_('Max capacity'),
    )
    last_restocked = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_('Last restocked'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = InventoryRecordQuerySet.as_manager()

    class Meta:
        db_table = 'station_inventory'
        verbose_name = _('Inventory record')
        verbose_name_plural = _('Inventory records')
        constraints = [
            models.UniqueConstraint(
                fields=['station', 'item'],
                name='unique_inventory_per_station_item',
            ),
        ]
        indexes = [
            models.Index(fields=['station', 'current_stock'], name='station_inv_stock_idx'),
        ]

    @property
    def stock_status(self) -> str:
        """Threshold band of the current stock."""
        # Import here to avoid circular import
        from ppeman.thresholds import evaluate

        return evaluate(self.current_stock, self.min_threshold, self.critical_threshold)

    @property
    def resource_id(self) -> str:
        """Identifier used on audit entries."""
        return f"{self.station_id}:{self.item_id}"

    def __str__(self) -> str:
        return f"{self.item_id}@{self.station_id}: {self.current_stock}"
