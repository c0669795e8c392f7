"""
Audit trail — best-effort recording of inventory actions.

Usage:
    from ppeman.services.audit import log_action_on_commit

    with transaction.atomic():
        ...
        log_action_on_commit(actor, 'UPDATE_STOCK', 'INVENTORY', record.resource_id,
                             old_values={...}, new_values={...})
"""

import logging
from functools import partial
from typing import Any

from django.db import transaction

from ppeman.adapters import get_audit_logger
from ppeman.protocols.audit import AuditRecord

logger = logging.getLogger('ppeman')


def log_action(user_id, action: str, resource_type: str, resource_id: str,
               old_values: dict[str, Any] | None = None,
               new_values: dict[str, Any] | None = None,
               metadata: dict[str, Any] | None = None) -> bool:
    """
    Record an action. Never raises.

    Returns:
        True if the audit logger accepted the record
    """
    record = AuditRecord(
        user_id=str(user_id),
        action=action,
        resource_type=resource_type,
        resource_id=str(resource_id),
        old_values=old_values,
        new_values=new_values,
        metadata=metadata or {},
    )
    try:
        get_audit_logger().log_action(record)
    except Exception:
        logger.exception(
            "inventory.audit.failed",
            extra={"action": action, "resource_type": resource_type, "resource_id": str(resource_id)},
        )
        return False
    return True


def log_action_on_commit(user_id, action: str, resource_type: str, resource_id: str,
                         **kwargs) -> None:
    """Defer log_action until the surrounding transaction commits."""
    transaction.on_commit(
        partial(log_action, user_id, action, resource_type, resource_id, **kwargs)
    )
