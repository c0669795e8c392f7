"""
Ppeman configuration.

Usage in settings.py:
    PPEMAN = {
        "NOTIFIER": "ppeman.adapters.email.EmailStockAlertNotifier",
        "AUDIT_LOGGER": "ppeman.adapters.audit.DatabaseAuditLogger",
        "DEFAULT_MIN_THRESHOLD": 5,
        "DB_READY_ATTEMPTS": 3,
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class PpemanSettings:
    """Ppeman configuration settings."""

    # Stock alert notifier backend (dotted path)
    NOTIFIER: str = "ppeman.adapters.email.EmailStockAlertNotifier"

    # Audit trail backend (dotted path)
    AUDIT_LOGGER: str = "ppeman.adapters.audit.DatabaseAuditLogger"

    # Actor recorded when no user drives the operation
    SYSTEM_ACTOR: str = "system"

    # Auto-initialization defaults for items without their own threshold
    DEFAULT_MIN_THRESHOLD: int = 5
    DEFAULT_MAX_CAPACITY: int = 100

    # Default size of the active alert listing
    ALERTS_LIMIT: int = 50

    # Database readiness retry (startup race only)
    DB_READY_ATTEMPTS: int = 3
    DB_READY_RETRY_DELAY: float = 1.0

    # Sender of stock alert mails ("" = DEFAULT_FROM_EMAIL)
    ALERT_FROM_EMAIL: str = ""


def get_ppeman_settings() -> PpemanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "PPEMAN", {})
    return PpemanSettings(**{
        k: v for k, v in user_settings.items()
        if k in PpemanSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_ppeman_settings(), name)


ppeman_settings = _LazySettings()
