"""
NotificationRecipient model — explicit roster for stock alert mails.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class NotificationRecipientQuerySet(models.QuerySet):

    def stock_alert_roster(self):
        """Active recipients flagged for stock alerts."""
        return self.filter(is_active=True, receives_stock_alerts=True)


class NotificationRecipient(models.Model):
    """Person who receives alert notifications."""

    name = models.CharField(
        max_length=100,
        verbose_name=_('Name'),
    )
    email = models.EmailField(
        unique=True,
        verbose_name=_('Email'),
    )
    receives_stock_alerts = models.BooleanField(
        default=True,
        verbose_name=_('Receives stock alerts'),
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name=_('Active'),
    )

    created_at = models.DateTimeField(auto_now_add=True)

    objects = NotificationRecipientQuerySet.as_manager()

    class Meta:
        verbose_name = _('Notification recipient')
        verbose_name_plural = _('Notification recipients')
        ordering = ['name']

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
