"""
Ppeman — PPE inventory thresholds and alerting.

Per-station stock counts, threshold alerts and notification fan-out.

Usage:
    from ppeman import inventory, InventoryError

    inventory.update_stock(station.pk, gloves.pk, 12, 'SUBTRACT', actor='42')
    inventory.bulk_restock(station.pk, 50)
    inventory.active_alerts(limit=20)
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'inventory':
        from ppeman.service import Inventory
        return Inventory
    elif name == 'InventoryError':
        from ppeman.exceptions import InventoryError
        return InventoryError
    elif name == 'Station':
        from ppeman.models.station import Station
        return Station
    elif name == 'PPEItem':
        from ppeman.models.station import PPEItem
        return PPEItem
    elif name == 'InventoryRecord':
        from ppeman.models.inventory import InventoryRecord
        return InventoryRecord
    elif name == 'InventoryAlert':
        from ppeman.models.alert import InventoryAlert
        return InventoryAlert
    elif name == 'evaluate':
        from ppeman.thresholds import evaluate
        return evaluate
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'inventory',
    'InventoryError',
    'Station',
    'PPEItem',
    'InventoryRecord',
    'InventoryAlert',
    'evaluate',
]

__version__ = '0.1.0'
