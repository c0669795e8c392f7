"""
Enums for Ppeman models.

Values are upper-case strings; they are the wire format of the HTTP API.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class StockStatus(models.TextChoices):
    """Threshold band of a stock level. CRITICAL overrides LOW overrides GOOD."""
    GOOD = 'GOOD', _('Good')
    LOW = 'LOW', _('Low')
    CRITICAL = 'CRITICAL', _('Critical')


class StockOperation(models.TextChoices):
    """Direction of an incremental stock mutation."""
    ADD = 'ADD', _('Add')
    SUBTRACT = 'SUBTRACT', _('Subtract')


class AlertType(models.TextChoices):
    LOW_STOCK = 'LOW_STOCK', _('Low stock')
    CRITICAL_LOW = 'CRITICAL_LOW', _('Critically low')


class AlertSeverity(models.TextChoices):
    WARNING = 'WARNING', _('Warning')
    CRITICAL = 'CRITICAL', _('Critical')


class AlertStatus(models.TextChoices):
    """Alert lifecycle status."""
    ACTIVE = 'ACTIVE', _('Active')               # Breach open, nobody looked yet
    ACKNOWLEDGED = 'ACKNOWLEDGED', _('Acknowledged')  # A user has seen it
    RESOLVED = 'RESOLVED', _('Resolved')         # Stock recovered above min
