"""
AuditEntry model — append-only trail of inventory actions.
"""

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class AuditEntry(models.Model):
    """
    Who did what to which resource, with before/after values.

    Rules:
    - NEVER update() or delete()
    - Written after the business transaction commits (best effort)
    """

    user_id = models.CharField(
        max_length=150,
        verbose_name=_('User'),
    )
    action = models.CharField(
        max_length=50,
        db_index=True,
        verbose_name=_('Action'),
    )
    resource_type = models.CharField(
        max_length=50,
        verbose_name=_('Resource type'),
    )
    resource_id = models.CharField(
        max_length=100,
        blank=True,
        default='',
        verbose_name=_('Resource ID'),
    )
    old_values = models.JSONField(null=True, blank=True, verbose_name=_('Old values'))
    new_values = models.JSONField(null=True, blank=True, verbose_name=_('New values'))
    metadata = models.JSONField(default=dict, blank=True, verbose_name=_('Metadata'))

    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Timestamp'))

    class Meta:
        db_table = 'audit_trail'
        verbose_name = _('Audit entry')
        verbose_name_plural = _('Audit entries')
        ordering = ['timestamp']
        indexes = [
            models.Index(fields=['resource_type', 'resource_id'], name='audit_resource_idx'),
        ]

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValueError("Audit entries are immutable.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Audit entries are immutable.")

    def __str__(self) -> str:
        return f"{self.action} {self.resource_type}:{self.resource_id} by {self.user_id}"
