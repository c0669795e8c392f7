"""
InventoryAlert model — persisted record of a threshold breach.
"""

import uuid

from django.db import models
from django.db.models import Case, IntegerField, Q, Value, When
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from ppeman.models.enums import AlertSeverity, AlertStatus, AlertType


class InventoryAlertQuerySet(models.QuerySet):
    """QuerySet with lifecycle filters for InventoryAlert."""

    def active(self):
        return self.filter(status=AlertStatus.ACTIVE)

    def for_pair(self, station_id, item_id):
        return self.filter(station_id=station_id, item_id=item_id)

    def by_urgency(self):
        """CRITICAL first, then newest first."""
        return self.annotate(
            _severity_rank=Case(
                When(severity=AlertSeverity.CRITICAL, then=Value(0)),
                default=Value(1),
                output_field=IntegerField(),
            )
        ).order_by('_severity_rank', '-created_at')


class InventoryAlert(models.Model):
    """
    Threshold breach for a (station, item) pair.

    LIFECYCLE:

        ACTIVE ──acknowledge()──► ACKNOWLEDGED
          │
          └──stock back above min──► RESOLVED

    At most one ACTIVE alert exists per (station, item, alert_type).
    A LOW_STOCK alert is not superseded when stock turns CRITICAL; both
    stay ACTIVE until stock recovers.

    Alerts are never deleted. current_stock is the level at creation time
    and is not kept in sync with later drops in the same band.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    station = models.ForeignKey(
        'ppeman.Station',
        on_delete=models.PROTECT,
        related_name='alerts',
        verbose_name=_('Station'),
    )
    item = models.ForeignKey(
        'ppeman.PPEItem',
        on_delete=models.PROTECT,
        related_name='alerts',
        verbose_name=_('PPE Item'),
    )

    alert_type = models.CharField(
        max_length=20,
        choices=AlertType.choices,
        verbose_name=_('Alert type'),
    )
    severity = models.CharField(
        max_length=20,
        choices=AlertSeverity.choices,
        verbose_name=_('Severity'),
    )
    threshold_value = models.PositiveIntegerField(
        verbose_name=_('Threshold crossed'),
    )
    current_stock = models.PositiveIntegerField(
        verbose_name=_('Stock at creation'),
    )

    status = models.CharField(
        max_length=20,
        choices=AlertStatus.choices,
        default=AlertStatus.ACTIVE,
        db_index=True,
        verbose_name=_('Status'),
    )
    alert_sent = models.BooleanField(
        default=False,
        verbose_name=_('Notification sent'),
    )
    acknowledged_by = models.CharField(
        max_length=150,
        null=True,
        blank=True,
        verbose_name=_('Acknowledged by'),
    )
    acknowledged_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_('Acknowledged at'),
    )
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    objects = InventoryAlertQuerySet.as_manager()

    class Meta:
        db_table = 'inventory_alerts'
        verbose_name = _('Inventory alert')
        verbose_name_plural = _('Inventory alerts')
        constraints = [
            models.UniqueConstraint(
                fields=['station', 'item', 'alert_type'],
                condition=Q(status='ACTIVE'),
                name='unique_active_alert_per_condition',
            ),
        ]
        indexes = [
            models.Index(fields=['station', 'item', 'status'], name='inv_alert_pair_status_idx'),
        ]

    @property
    def is_active(self) -> bool:
        return self.status == AlertStatus.ACTIVE

    def __str__(self) -> str:
        return f"{self.alert_type} {self.item_id}@{self.station_id} [{self.status}]"
