"""
Tests for inventory.bulk_restock() and inventory.bulk_restock_all_stations().
"""

import logging

import pytest

from ppeman import inventory
from ppeman.exceptions import NotFoundError, ValidationError
from ppeman.models import (
    AlertSeverity,
    AlertType,
    AuditEntry,
    InventoryAlert,
    InventoryRecord,
    PPEItem,
    Station,
)
from ppeman.services.alerts import AlertManager
from ppeman.services.bulk import BulkOperator


pytestmark = pytest.mark.django_db


class TestBulkRestock:
    """Tests for a single station."""

    def test_sets_absolute_quantity(self, record, station, goggles):
        other = InventoryRecord.objects.create(
            station=station, item=goggles, current_stock=70, min_threshold=8, critical_threshold=4,
        )

        result = inventory.bulk_restock(station.pk, 50)

        record.refresh_from_db()
        other.refresh_from_db()
        assert record.current_stock == 50
        assert other.current_stock == 50
        assert record.last_restocked is not None
        assert result.message == 'Successfully restocked 2 items to 50 units each'
        assert not result.initialized
        by_item = {i.item_id: i for i in result.updated_items}
        assert by_item[record.item_id].difference == 30
        assert by_item[other.item_id].difference == -20

    def test_resolves_alerts(self, record, station):
        inventory.update_stock(station.pk, record.item_id, 18, 'SUBTRACT')
        assert InventoryAlert.objects.active().count() == 1

        inventory.bulk_restock(station.pk, 40)

        assert not InventoryAlert.objects.active().exists()

    def test_restock_to_low_level_raises_alert(self, record, station):
        """Bulk restock runs the same alert rules as a single mutation."""
        inventory.bulk_restock(station.pk, 3)

        alert = InventoryAlert.objects.active().get()
        assert alert.alert_type == AlertType.CRITICAL_LOW
        assert alert.severity == AlertSeverity.CRITICAL

    def test_zero_quantity_allowed(self, record, station):
        inventory.bulk_restock(station.pk, 0)

        record.refresh_from_db()
        assert record.current_stock == 0

    def test_negative_quantity_rejected(self, record, station):
        with pytest.raises(ValidationError):
            inventory.bulk_restock(station.pk, -1)

    def test_quantity_above_column_range_rejected(self, record, station):
        with pytest.raises(ValidationError) as exc:
            inventory.bulk_restock(station.pk, 2147483648)

        assert exc.value.code == 'INVALID_FIELD'
        record.refresh_from_db()
        assert record.current_stock == 20

    def test_unknown_station(self, db):
        with pytest.raises(NotFoundError) as exc:
            inventory.bulk_restock(404, 10)

        assert exc.value.code == 'STATION_NOT_FOUND'

    def test_audits_each_item(self, record, station, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            inventory.bulk_restock(station.pk, 50, actor='7')

        entry = AuditEntry.objects.get(action='BULK_RESTOCK')
        assert entry.user_id == '7'
        assert entry.resource_type == 'STATION_INVENTORY'
        assert entry.metadata['ppe_item_id'] == record.item_id
        assert entry.metadata['difference'] == 30

    def test_failure_rolls_back_whole_station(self, record, station, goggles, monkeypatch):
        InventoryRecord.objects.create(station=station, item=goggles, current_stock=70)
        calls = []

        def flaky(record, new_stock, actor=None):
            calls.append(record.pk)
            if len(calls) == 2:
                raise RuntimeError("boom")

        monkeypatch.setattr(AlertManager, 'on_stock_changed', flaky)

        with pytest.raises(RuntimeError):
            inventory.bulk_restock(station.pk, 50)

        assert sorted(InventoryRecord.objects.values_list('current_stock', flat=True)) == [20, 70]


class TestAutoInitialize:
    """A station with no records is provisioned first."""

    def test_creates_one_record_per_item(self, station, gloves, goggles, caplog):
        no_threshold = PPEItem.objects.create(name='Ear Plugs', category='hearing', min_threshold=0)

        with caplog.at_level(logging.INFO, logger='ppeman'):
            result = inventory.bulk_restock(station.pk, 25)

        assert result.initialized
        assert len(result.updated_items) == 3
        assert all(i.old_stock == 0 and i.new_stock == 25 for i in result.updated_items)
        assert 'inventory.bulk_restock.auto_initialize' in caplog.messages

        gloves_record = InventoryRecord.objects.get(station=station, item=gloves)
        assert gloves_record.min_threshold == 10
        assert gloves_record.critical_threshold == 5
        assert gloves_record.max_capacity == 100

        fallback = InventoryRecord.objects.get(station=station, item=no_threshold)
        assert fallback.min_threshold == 5
        assert fallback.critical_threshold == 2

    def test_no_items(self, station):
        with pytest.raises(NotFoundError) as exc:
            inventory.bulk_restock(station.pk, 25)

        assert exc.value.code == 'NO_PPE_ITEMS'
        assert not InventoryRecord.objects.exists()


class TestBulkRestockAllStations:
    """Tests for every station."""

    def test_restocks_every_station(self, record, other_station, gloves):
        InventoryRecord.objects.create(station=other_station, item=gloves, current_stock=1)

        report = inventory.bulk_restock_all_stations(60)

        assert report.total_stations == 2
        assert report.successful_stations == 2
        assert report.failed_stations == 0
        assert report.total_items_restocked == 2
        assert report.message == 'Bulk restock completed: 2 successful, 0 failed'
        assert set(InventoryRecord.objects.values_list('current_stock', flat=True)) == {60}
        # Ordered by station name
        assert [d.station_name for d in report.details] == ['Loading Dock', 'Workshop A']

    def test_empty_station_auto_initializes_during_all_stations(self, record, other_station, goggles):
        """Three stations, one without rows: it is provisioned in the same run."""
        storeroom = Station.objects.create(name='Storeroom', location='Building 1')
        InventoryRecord.objects.create(station=storeroom, item=goggles, current_stock=3)

        report = inventory.bulk_restock_all_stations(40)

        assert report.total_stations == 3
        assert report.successful_stations == 3
        assert report.failed_stations == 0
        assert report.total_items_restocked == 4
        assert {d.station_name: d.items_restocked for d in report.details} == {
            'Loading Dock': 2,
            'Storeroom': 1,
            'Workshop A': 1,
        }
        provisioned = InventoryRecord.objects.filter(station=other_station)
        assert provisioned.count() == PPEItem.objects.count()
        assert set(provisioned.values_list('current_stock', flat=True)) == {40}
        assert set(InventoryRecord.objects.values_list('current_stock', flat=True)) == {40}

    def test_partial_failure(self, record, other_station, monkeypatch, caplog):
        """A station that cannot be provisioned fails alone."""
        annex = Station.objects.create(name='Annex', location='Yard')

        def no_items(station):
            raise NotFoundError('NO_PPE_ITEMS', station_id=station.pk)

        monkeypatch.setattr(BulkOperator, 'auto_initialize', no_items)

        with caplog.at_level(logging.WARNING, logger='ppeman'):
            report = inventory.bulk_restock_all_stations(15)

        assert report.total_stations == 3
        assert report.successful_stations == 1
        assert report.failed_stations == 2
        assert report.message == 'Bulk restock completed: 1 successful, 2 failed'
        failed = {d.station_name: d for d in report.details if not d.success}
        assert set(failed) == {'Annex', 'Loading Dock'}
        assert failed['Annex'].error == 'No PPE items found in system'
        assert 'inventory.bulk_restock.station_failed' in caplog.messages

        record.refresh_from_db()
        assert record.current_stock == 15
        assert not annex.inventory.exists()

    def test_no_stations(self, db):
        with pytest.raises(NotFoundError) as exc:
            inventory.bulk_restock_all_stations(10)

        assert exc.value.code == 'NO_STATIONS'

    def test_report_as_dict(self, record):
        data = inventory.bulk_restock_all_stations(30).as_dict()

        assert data['message'] == 'Bulk restock completed: 1 successful, 0 failed'
        assert data['details'][0]['items_restocked'] == 1
