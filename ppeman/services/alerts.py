"""
Stock alerts — create, deduplicate, resolve and acknowledge threshold alerts.

on_stock_changed() runs inside the caller's stock transaction, after the
InventoryRecord row has been locked. That lock is what makes the
"no ACTIVE alert yet" check safe: two mutations of the same pair cannot
both see an empty slot and both insert.

Usage:
    from ppeman.services.alerts import AlertManager

    with transaction.atomic():
        record = InventoryRecord.objects.select_for_update().get(...)
        ...
        outcome = AlertManager.on_stock_changed(record, new_stock, actor)
"""

import logging
from dataclasses import dataclass
from functools import partial
from typing import Any, Iterable

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.utils import timezone

from ppeman.conf import ppeman_settings
from ppeman.exceptions import InvalidStateError, InventoryError, NotFoundError, ValidationError
from ppeman.models.alert import InventoryAlert
from ppeman.models.enums import AlertSeverity, AlertStatus, AlertType, StockStatus
from ppeman.models.inventory import InventoryRecord
from ppeman.services.audit import log_action_on_commit
from ppeman.services.notifications import dispatch_stock_alert
from ppeman.thresholds import alert_kind_for, evaluate, threshold_for
from ppeman.validation import require_non_negative_int

logger = logging.getLogger('ppeman')


@dataclass(frozen=True)
class AlertOutcome:
    """What a stock change did to the alert table."""

    status: StockStatus
    created: InventoryAlert | None = None
    resolved: int = 0


class AlertManager:
    """Alert lifecycle methods."""

    @classmethod
    def on_stock_changed(cls, record: InventoryRecord, new_stock: int,
                         actor: str | None = None) -> AlertOutcome:
        """
        Re-evaluate a pair after its stock changed.

        - CRITICAL/LOW: create an alert of the matching type unless an
          ACTIVE one already exists (no update of the existing one).
        - GOOD: resolve every ACTIVE alert of the pair, whatever its type.

        A LOW_STOCK alert stays ACTIVE when stock drops further into
        CRITICAL; a second, CRITICAL_LOW alert is added next to it.

        Concurrency:
            - Must be called with the InventoryRecord row locked
            - Joins the caller's transaction (savepoint if already atomic)
            - Notification is deferred to transaction.on_commit()
        """
        actor = actor or ppeman_settings.SYSTEM_ACTOR
        status = evaluate(new_stock, record.min_threshold, record.critical_threshold)
        kind = alert_kind_for(status)

        with transaction.atomic():
            if kind is None:
                resolved = cls._resolve_active(record, actor)
                return AlertOutcome(status=status, resolved=resolved)

            alert_type, severity = kind
            already_open = (
                InventoryAlert.objects
                .for_pair(record.station_id, record.item_id)
                .active()
                .filter(alert_type=alert_type)
                .exists()
            )
            if already_open:
                return AlertOutcome(status=status)

            alert = cls._create_alert(record, alert_type, severity, new_stock)
            transaction.on_commit(partial(dispatch_stock_alert, alert.pk))
            return AlertOutcome(status=status, created=alert)

    @classmethod
    def update_thresholds(cls, station_id, item_id, min_threshold: int,
                          critical_threshold: int, actor: str | None = None) -> InventoryRecord:
        """
        Change the alert thresholds of a pair.

        Current stock is not re-evaluated: alerts only move on the next
        stock mutation.

        Raises:
            ValidationError('INVALID_THRESHOLDS'): If critical >= min
            ValidationError('INVALID_FIELD'): If a threshold is not a
                non-negative integer
            NotFoundError('INVENTORY_NOT_FOUND'): If the pair has no record
        """
        actor = actor or ppeman_settings.SYSTEM_ACTOR
        require_non_negative_int(min_threshold, 'min_threshold')
        require_non_negative_int(critical_threshold, 'critical_threshold')
        if critical_threshold >= min_threshold:
            raise ValidationError(
                'INVALID_THRESHOLDS',
                min_threshold=min_threshold,
                critical_threshold=critical_threshold,
            )

        with transaction.atomic():
            try:
                record = InventoryRecord.objects.select_for_update().get(
                    station_id=station_id, item_id=item_id,
                )
            except InventoryRecord.DoesNotExist:
                raise NotFoundError('INVENTORY_NOT_FOUND', station_id=station_id, item_id=item_id)

            old_values = {
                'minThreshold': record.min_threshold,
                'criticalThreshold': record.critical_threshold,
            }
            record.min_threshold = min_threshold
            record.critical_threshold = critical_threshold
            record.save(update_fields=['min_threshold', 'critical_threshold', 'updated_at'])

            log_action_on_commit(
                actor, 'UPDATE_THRESHOLDS', 'INVENTORY', record.resource_id,
                old_values=old_values,
                new_values={'minThreshold': min_threshold, 'criticalThreshold': critical_threshold},
            )

        logger.info(
            "inventory.thresholds.update",
            extra={
                "station_id": station_id,
                "item_id": item_id,
                "min_threshold": min_threshold,
                "critical_threshold": critical_threshold,
            },
        )
        return record

    @classmethod
    def bulk_update_thresholds(cls, updates: Iterable[dict[str, Any]],
                               actor: str | None = None) -> list[dict[str, Any]]:
        """
        Apply several threshold updates, each on its own.

        Each update is a dict with station_id, item_id, min_threshold and
        critical_threshold. A failing entry does not stop the others.

        Returns:
            One dict per update: the input plus 'success' and, on failure,
            'error' and 'code'.
        """
        results = []
        for update in updates:
            try:
                cls.update_thresholds(
                    update.get('station_id'),
                    update.get('item_id'),
                    update.get('min_threshold'),
                    update.get('critical_threshold'),
                    actor,
                )
            except InventoryError as e:
                results.append({**update, 'success': False, 'error': e.message, 'code': e.code})
            else:
                results.append({**update, 'success': True})
        return results

    @classmethod
    def acknowledge_alert(cls, alert_id, actor: str | None = None) -> InventoryAlert:
        """
        Acknowledge an alert.

        Transition: ACTIVE → ACKNOWLEDGED. Acknowledging an already
        ACKNOWLEDGED alert changes nothing.

        Raises:
            NotFoundError('ALERT_NOT_FOUND'): If the alert doesn't exist
            InvalidStateError('ALERT_RESOLVED'): If the alert is RESOLVED
        """
        actor = actor or ppeman_settings.SYSTEM_ACTOR

        with transaction.atomic():
            try:
                alert = InventoryAlert.objects.select_for_update().get(pk=alert_id)
            except (InventoryAlert.DoesNotExist, DjangoValidationError):
                raise NotFoundError('ALERT_NOT_FOUND', alert_id=alert_id)

            if alert.status == AlertStatus.RESOLVED:
                raise InvalidStateError(
                    'ALERT_RESOLVED',
                    alert_id=alert_id,
                    current=alert.status,
                )
            if alert.status == AlertStatus.ACKNOWLEDGED:
                return alert

            alert.status = AlertStatus.ACKNOWLEDGED
            alert.acknowledged_by = actor
            alert.acknowledged_at = timezone.now()
            alert.save(update_fields=['status', 'acknowledged_by', 'acknowledged_at'])

            log_action_on_commit(actor, 'ACKNOWLEDGE_ALERT', 'INVENTORY_ALERT', alert.pk)

        logger.info(
            "inventory.alert.acknowledged",
            extra={"alert_id": str(alert.pk), "actor": actor},
        )
        return alert

    # ══════════════════════════════════════════════════════════════
    # INTERNALS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def _create_alert(cls, record: InventoryRecord, alert_type: AlertType,
                      severity: AlertSeverity, current_stock: int) -> InventoryAlert:
        alert = InventoryAlert.objects.create(
            station_id=record.station_id,
            item_id=record.item_id,
            alert_type=alert_type,
            severity=severity,
            threshold_value=threshold_for(
                alert_type, record.min_threshold, record.critical_threshold,
            ),
            current_stock=current_stock,
            status=AlertStatus.ACTIVE,
        )
        logger.warning(
            "inventory.alert.created",
            extra={
                "alert_id": str(alert.pk),
                "station_id": record.station_id,
                "item_id": record.item_id,
                "alert_type": alert_type,
                "current_stock": current_stock,
                "threshold": alert.threshold_value,
            },
        )
        return alert

    @classmethod
    def _resolve_active(cls, record: InventoryRecord, actor: str) -> int:
        resolved = (
            InventoryAlert.objects
            .for_pair(record.station_id, record.item_id)
            .active()
            .update(
                status=AlertStatus.RESOLVED,
                acknowledged_by=actor,
                acknowledged_at=timezone.now(),
            )
        )
        if resolved:
            logger.info(
                "inventory.alert.resolved",
                extra={
                    "station_id": record.station_id,
                    "item_id": record.item_id,
                    "count": resolved,
                },
            )
        return resolved
