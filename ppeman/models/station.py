"""
Station and PPEItem models — where stock lives and what is stocked.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class Station(models.Model):
    """
    Physical PPE dispensing location holding its own inventory.

    Examples:
        Station.objects.create(name='Workshop A', location='Building 2, ground floor')
    """

    name = models.CharField(
        max_length=100,
        verbose_name=_('Name'),
    )
    location = models.CharField(
        max_length=255,
        verbose_name=_('Location'),
    )
    description = models.TextField(
        blank=True,
        default='',
        verbose_name=_('Description'),
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name=_('Active'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Station')
        verbose_name_plural = _('Stations')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name


class PPEItem(models.Model):
    """
    Type of protective equipment tracked per station.

    min_threshold is the item-wide default used when a station's
    inventory is auto-initialized; each InventoryRecord keeps its own.
    """

    name = models.CharField(
        max_length=100,
        verbose_name=_('Name'),
    )
    category = models.CharField(
        max_length=50,
        verbose_name=_('Category'),
        help_text=_('E.g. gloves, eye protection, respiratory'),
    )
    description = models.TextField(
        blank=True,
        default='',
        verbose_name=_('Description'),
    )
    min_threshold = models.PositiveIntegerField(
        default=10,
        verbose_name=_('Default minimum threshold'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('PPE Item')
        verbose_name_plural = _('PPE Items')
        ordering = ['name']

    def __str__(self) -> str:
        return f"{self.name} ({self.category})"
