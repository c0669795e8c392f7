"""
Audit Logger Protocol.

Interface for recording who changed what. Callers treat it as
fire-and-forget: errors are logged, never raised into business code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class AuditRecord:
    """One audited action."""

    user_id: str
    action: str  # "UPDATE_STOCK", "UPDATE_THRESHOLDS", ...
    resource_type: str  # "INVENTORY", "INVENTORY_ALERT", "STATION_INVENTORY"
    resource_id: str
    old_values: dict[str, Any] | None = None
    new_values: dict[str, Any] | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class AuditLogger(Protocol):
    """Protocol for audit trail backends."""

    def log_action(self, record: AuditRecord) -> None:
        """Persist an audit record."""
        ...
