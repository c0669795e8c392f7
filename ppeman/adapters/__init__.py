"""
Ppeman Adapters.

Implementations of protocols for external systems, loaded from settings.

Usage:
    from ppeman.adapters import get_notifier, get_audit_logger

    get_notifier().send_stock_alert(notice, recipients)

Settings:
    PPEMAN = {
        "NOTIFIER": "ppeman.adapters.email.EmailStockAlertNotifier",
        "AUDIT_LOGGER": "ppeman.adapters.audit.DatabaseAuditLogger",
    }
"""

from __future__ import annotations

import logging
import threading

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from ppeman.conf import ppeman_settings
from ppeman.protocols.audit import AuditLogger
from ppeman.protocols.notifications import StockAlertNotifier

logger = logging.getLogger(__name__)


# Cached adapter instances
_lock = threading.Lock()
_notifier: StockAlertNotifier | None = None
_audit_logger: AuditLogger | None = None


def _load(setting_name: str):
    path = getattr(ppeman_settings, setting_name)
    if not path:
        raise ImproperlyConfigured(f"PPEMAN['{setting_name}'] must be configured.")
    try:
        adapter = import_string(path)()
    except ImportError as e:
        raise ImproperlyConfigured(
            f"Failed to import {setting_name.lower()} '{path}': {e}"
        ) from e
    logger.debug("Loaded %s: %s", setting_name.lower(), path)
    return adapter


def get_notifier() -> StockAlertNotifier:
    """
    Return the configured stock alert notifier.

    Raises:
        ImproperlyConfigured: If NOTIFIER is empty or cannot be imported
    """
    global _notifier

    if _notifier is None:
        with _lock:
            if _notifier is None:  # double-checked
                _notifier = _load("NOTIFIER")
    return _notifier


def get_audit_logger() -> AuditLogger:
    """
    Return the configured audit logger.

    Raises:
        ImproperlyConfigured: If AUDIT_LOGGER is empty or cannot be imported
    """
    global _audit_logger

    if _audit_logger is None:
        with _lock:
            if _audit_logger is None:
                _audit_logger = _load("AUDIT_LOGGER")
    return _audit_logger


def reset_adapters() -> None:
    """Reset the cached adapters. Useful for testing."""
    global _notifier, _audit_logger
    _notifier = None
    _audit_logger = None


__all__ = [
    "get_notifier",
    "get_audit_logger",
    "reset_adapters",
]
