"""
Database Audit Logger — stores audit records as AuditEntry rows.

Usage in settings.py:
    PPEMAN = {
        "AUDIT_LOGGER": "ppeman.adapters.audit.DatabaseAuditLogger",
    }
"""

from __future__ import annotations

import json

from django.core.serializers.json import DjangoJSONEncoder

from ppeman.protocols.audit import AuditRecord


def _jsonable(values):
    """Round-trip through DjangoJSONEncoder so datetimes and UUIDs survive JSONField."""
    if values is None:
        return None
    return json.loads(json.dumps(values, cls=DjangoJSONEncoder))


class DatabaseAuditLogger:
    """Implements AuditLogger on top of the AuditEntry model."""

    def log_action(self, record: AuditRecord) -> None:
        from ppeman.models.audit import AuditEntry

        AuditEntry.objects.create(
            user_id=record.user_id,
            action=record.action,
            resource_type=record.resource_type,
            resource_id=record.resource_id,
            old_values=_jsonable(record.old_values),
            new_values=_jsonable(record.new_values),
            metadata=_jsonable(record.metadata) or {},
        )
