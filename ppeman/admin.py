"""
Ppeman Admin.

Provides:
- Station, PPEItem, NotificationRecipient: list + edit
- InventoryRecord: read-only (stock and thresholds change via the service)
- InventoryAlert: read-only with "acknowledge" action
- AuditEntry: read-only audit trail
"""

import logging

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from ppeman.exceptions import InventoryError
from ppeman.models import (
    AlertStatus,
    AuditEntry,
    InventoryAlert,
    InventoryRecord,
    NotificationRecipient,
    PPEItem,
    Station,
)

logger = logging.getLogger(__name__)


class ReadOnlyAdmin(admin.ModelAdmin):
    """No add, change or delete from the admin."""

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =========================================================================
# STATION / ITEM / RECIPIENT ADMIN
# =========================================================================

@admin.register(Station)
class StationAdmin(admin.ModelAdmin):
    list_display = ['name', 'location', 'is_active']
    list_filter = ['is_active']
    search_fields = ['name', 'location']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(PPEItem)
class PPEItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'min_threshold']
    list_filter = ['category']
    search_fields = ['name', 'category']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(NotificationRecipient)
class NotificationRecipientAdmin(admin.ModelAdmin):
    """Roster of stock alert mail recipients."""

    list_display = ['name', 'email', 'receives_stock_alerts', 'is_active']
    list_filter = ['receives_stock_alerts', 'is_active']
    search_fields = ['name', 'email']


# =========================================================================
# INVENTORY ADMIN (read-only)
# =========================================================================

@admin.register(InventoryRecord)
class InventoryRecordAdmin(ReadOnlyAdmin):
    """Read-only. Stock only changes via the Inventory service."""

    list_display = ['station', 'item', 'current_stock', 'min_threshold',
                    'critical_threshold', 'status_display', 'last_restocked']
    list_filter = ['station', 'item__category']
    search_fields = ['station__name', 'item__name']
    list_select_related = ['station', 'item']
    ordering = ['current_stock']

    @admin.display(description=_('Status'))
    def status_display(self, obj):
        return obj.stock_status.label


# =========================================================================
# ALERT ADMIN (read-only with acknowledge action)
# =========================================================================

@admin.register(InventoryAlert)
class InventoryAlertAdmin(ReadOnlyAdmin):
    list_display = ['created_at', 'station', 'item', 'alert_type', 'severity',
                    'current_stock', 'threshold_value', 'status', 'alert_sent']
    list_filter = ['status', 'severity', 'alert_type', 'station']
    search_fields = ['station__name', 'item__name']
    list_select_related = ['station', 'item']
    date_hierarchy = 'created_at'
    actions = ['acknowledge_alerts']

    @admin.action(description=_('Acknowledge selected alerts'))
    def acknowledge_alerts(self, request, queryset):
        from ppeman import inventory

        count = 0
        for alert in queryset.filter(status=AlertStatus.ACTIVE):
            try:
                inventory.acknowledge_alert(alert.pk, actor=str(request.user.pk))
                count += 1
            except InventoryError as exc:
                logger.warning("acknowledge_alerts: failed to acknowledge %s: %s", alert.pk, exc)

        self.message_user(request, _('{count} alert(s) acknowledged.').format(count=count))


# =========================================================================
# AUDIT ADMIN (read-only)
# =========================================================================

@admin.register(AuditEntry)
class AuditEntryAdmin(ReadOnlyAdmin):
    """Immutable audit trail."""

    list_display = ['timestamp', 'action', 'resource_type', 'resource_id', 'user_id']
    list_filter = ['action', 'resource_type']
    search_fields = ['resource_id', 'user_id']
    date_hierarchy = 'timestamp'
