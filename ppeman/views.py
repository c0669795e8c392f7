"""
JSON views over the Inventory facade.

Every view requires an authenticated user; the user's primary key is the
actor recorded on audit entries and alert acknowledgements.

Request and response bodies use camelCase keys.

The POST views are not CSRF-exempt. With Django's CsrfViewMiddleware
enabled, session-authenticated clients must send the CSRF token
(X-CSRFToken header); CSRF policy beyond that belongs to the host project.
"""

import json
import logging
from functools import wraps

from django.db import DatabaseError
from django.http import JsonResponse
from django.views.decorators.http import require_GET, require_POST

from ppeman.exceptions import InventoryError, ValidationError
from ppeman.service import Inventory

logger = logging.getLogger('ppeman')

# Ids are BigAutoField keys; anything wider cannot reach the database.
MAX_DB_INTEGER = 9223372036854775807


def inventory_view(view):
    """Authenticate, then translate inventory and database errors to JSON."""

    @wraps(view)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse(
                {'error': 'Unauthorized', 'message': 'Authentication required'},
                status=401,
            )
        try:
            return view(request, *args, **kwargs)
        except InventoryError as e:
            return JsonResponse(e.as_dict(), status=e.http_status)
        except DatabaseError:
            logger.exception("inventory.http.database_error", extra={"path": request.path})
            return JsonResponse(
                {'error': 'DatabaseError', 'message': 'Internal server error'},
                status=500,
            )

    return wrapper


# ══════════════════════════════════════════════════════════════
# REQUEST PARSING
# ══════════════════════════════════════════════════════════════


def _json_body(request) -> dict:
    try:
        body = json.loads(request.body or b'{}')
    except (ValueError, UnicodeDecodeError):
        raise ValidationError('INVALID_FIELD', 'Request body must be valid JSON')
    if not isinstance(body, dict):
        raise ValidationError('INVALID_FIELD', 'Request body must be a JSON object')
    return body


def _require(body: dict, *fields: str) -> None:
    missing = [f for f in fields if body.get(f) in (None, '')]
    if missing:
        raise ValidationError('MISSING_FIELD', fields=','.join(missing))


def _int(value, field: str, code: str = 'INVALID_FIELD') -> int:
    """Parse an integer field; rejects bools, non-integral numbers and out-of-range values."""
    parsed = None
    if isinstance(value, int) and not isinstance(value, bool):
        parsed = value
    elif isinstance(value, float) and value.is_integer():
        parsed = int(value)
    elif isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            pass
    if parsed is None or abs(parsed) > MAX_DB_INTEGER:
        raise ValidationError(code, f"{field} must be an integer", field=field)
    return parsed


def _actor(request) -> str:
    return str(request.user.pk)


# ══════════════════════════════════════════════════════════════
# SERIALIZATION
# ══════════════════════════════════════════════════════════════


def _alert_json(alert, with_names: bool = False) -> dict:
    data = {
        'id': str(alert.pk),
        'stationId': alert.station_id,
        'ppeItemId': alert.item_id,
        'alertType': alert.alert_type,
        'severity': alert.severity,
        'thresholdValue': alert.threshold_value,
        'currentStock': alert.current_stock,
        'status': alert.status,
        'alertSent': alert.alert_sent,
        'acknowledgedBy': alert.acknowledged_by,
        'acknowledgedAt': alert.acknowledged_at.isoformat() if alert.acknowledged_at else None,
        'createdAt': alert.created_at.isoformat(),
    }
    if with_names:
        data['stationName'] = alert.station.name
        data['ppeItemName'] = alert.item.name
    return data


def _snapshot_json(snapshot) -> dict:
    record = snapshot.record
    return {
        'id': record.pk,
        'stationId': record.station_id,
        'stationName': record.station.name,
        'ppeItemId': record.item_id,
        'ppeItemName': record.item.name,
        'category': record.item.category,
        'currentStock': record.current_stock,
        'minThreshold': record.min_threshold,
        'criticalThreshold': record.critical_threshold,
        'maxCapacity': record.max_capacity,
        'lastRestocked': record.last_restocked.isoformat() if record.last_restocked else None,
        'stockStatus': snapshot.stock_status,
        'alertLevel': snapshot.alert_level,
        'activeAlerts': [_alert_json(a) for a in snapshot.active_alerts],
    }


# ══════════════════════════════════════════════════════════════
# VIEWS
# ══════════════════════════════════════════════════════════════


@require_GET
@inventory_view
def inventory_list(request):
    station_id = request.GET.get('station_id')
    if station_id not in (None, ''):
        station_id = _int(station_id, 'station_id')
    else:
        station_id = None
    snapshots = Inventory.inventory_with_alerts(station_id)
    return JsonResponse({'inventory': [_snapshot_json(s) for s in snapshots]})


@require_GET
@inventory_view
def inventory_stats(request):
    stats = Inventory.inventory_stats()
    return JsonResponse({
        'totalItems': stats['total_items'],
        'lowStockItems': stats['low_stock_items'],
        'criticalStockItems': stats['critical_stock_items'],
        'totalAlerts': stats['total_alerts'],
        'criticalAlerts': stats['critical_alerts'],
        'averageStock': stats['average_stock'],
    })


@require_POST
@inventory_view
def update_stock(request):
    body = _json_body(request)
    _require(body, 'stationId', 'ppeItemId', 'quantity', 'operation')
    result = Inventory.update_stock(
        _int(body['stationId'], 'stationId'),
        _int(body['ppeItemId'], 'ppeItemId'),
        _int(body['quantity'], 'quantity', 'INVALID_QUANTITY'),
        body['operation'],
        actor=_actor(request),
    )
    return JsonResponse({
        'success': True,
        'stationId': result.station_id,
        'ppeItemId': result.item_id,
        'previousStock': result.previous_stock,
        'newStock': result.new_stock,
        'operation': result.operation,
        'quantity': result.quantity,
        'stockStatus': result.stock_status,
        'alertCreated': _alert_json(result.alert_created) if result.alert_created else None,
        'alertsResolved': result.alerts_resolved,
    })


@require_POST
@inventory_view
def update_thresholds(request):
    body = _json_body(request)
    _require(body, 'stationId', 'ppeItemId', 'minThreshold', 'criticalThreshold')
    record = Inventory.update_thresholds(
        _int(body['stationId'], 'stationId'),
        _int(body['ppeItemId'], 'ppeItemId'),
        _int(body['minThreshold'], 'minThreshold'),
        _int(body['criticalThreshold'], 'criticalThreshold'),
        actor=_actor(request),
    )
    return JsonResponse({
        'success': True,
        'message': 'Thresholds updated successfully',
        'stationId': record.station_id,
        'ppeItemId': record.item_id,
        'minThreshold': record.min_threshold,
        'criticalThreshold': record.critical_threshold,
    })


@require_POST
@inventory_view
def bulk_update_thresholds(request):
    body = _json_body(request)
    updates = body.get('updates')
    if not isinstance(updates, list) or not updates:
        raise ValidationError('MISSING_FIELD', 'updates must be a non-empty list', field='updates')

    parsed = []
    for entry in updates:
        if not isinstance(entry, dict):
            raise ValidationError('INVALID_FIELD', 'Each update must be an object', field='updates')
        _require(entry, 'stationId', 'ppeItemId', 'minThreshold', 'criticalThreshold')
        parsed.append({
            'station_id': _int(entry['stationId'], 'stationId'),
            'item_id': _int(entry['ppeItemId'], 'ppeItemId'),
            'min_threshold': _int(entry['minThreshold'], 'minThreshold'),
            'critical_threshold': _int(entry['criticalThreshold'], 'criticalThreshold'),
        })

    results = Inventory.bulk_update_thresholds(parsed, actor=_actor(request))
    return JsonResponse({
        'success': all(r['success'] for r in results),
        'results': [
            {
                'stationId': r['station_id'],
                'ppeItemId': r['item_id'],
                'success': r['success'],
                **({'error': r['error'], 'code': r['code']} if not r['success'] else {}),
            }
            for r in results
        ],
    })


@require_GET
@inventory_view
def alert_list(request):
    limit = request.GET.get('limit')
    limit = _int(limit, 'limit') if limit not in (None, '') else None
    if limit is not None and limit <= 0:
        raise ValidationError('INVALID_FIELD', 'limit must be a positive integer', field='limit')
    alerts = Inventory.active_alerts(limit)
    return JsonResponse({'alerts': [_alert_json(a, with_names=True) for a in alerts]})


@require_POST
@inventory_view
def acknowledge_alert(request, alert_id):
    alert = Inventory.acknowledge_alert(alert_id, actor=_actor(request))
    return JsonResponse({
        'success': True,
        'message': 'Alert acknowledged successfully',
        'alert': _alert_json(alert),
    })


@require_POST
@inventory_view
def bulk_restock(request):
    body = _json_body(request)
    _require(body, 'stationId', 'quantity')
    result = Inventory.bulk_restock(
        _int(body['stationId'], 'stationId'),
        _int(body['quantity'], 'quantity'),
        actor=_actor(request),
    )
    return JsonResponse({
        'success': True,
        'message': result.message,
        'stationId': result.station_id,
        'autoInitialized': result.initialized,
        'updatedItems': [
            {
                'ppe_item_id': item.item_id,
                'old_stock': item.old_stock,
                'new_stock': item.new_stock,
                'difference': item.difference,
            }
            for item in result.updated_items
        ],
    })


@require_POST
@inventory_view
def bulk_restock_all(request):
    body = _json_body(request)
    _require(body, 'quantity')
    report = Inventory.bulk_restock_all_stations(
        _int(body['quantity'], 'quantity'),
        actor=_actor(request),
    )
    return JsonResponse({
        'success': True,
        'message': report.message,
        'results': {
            'totalStations': report.total_stations,
            'successfulStations': report.successful_stations,
            'failedStations': report.failed_stations,
            'totalItemsRestocked': report.total_items_restocked,
            'details': [
                {
                    'stationId': d.station_id,
                    'stationName': d.station_name,
                    'success': d.success,
                    'itemsRestocked': d.items_restocked,
                    'message': d.message,
                    'error': d.error,
                }
                for d in report.details
            ],
        },
    })
