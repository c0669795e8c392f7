"""
Tests for alert notification dispatch.
"""

import pytest

from ppeman import inventory
from ppeman.adapters import get_notifier
from ppeman.adapters.email import EmailStockAlertNotifier, build_subject
from ppeman.adapters.noop import NoopStockAlertNotifier
from ppeman.models import InventoryAlert, NotificationRecipient
from ppeman.protocols import StockAlertNotice, StockAlertNotifier
from ppeman.services.notifications import build_notice, dispatch_stock_alert, get_alert_roster


pytestmark = pytest.mark.django_db


class RecordingNotifier:
    sent = []

    def send_stock_alert(self, notice, recipients):
        self.sent.append((notice, recipients))
        return True


class ExplodingNotifier:
    def send_stock_alert(self, notice, recipients):
        raise ConnectionError("smtp down")


@pytest.fixture
def recording_notifier(ppeman_config):
    RecordingNotifier.sent = []
    ppeman_config['NOTIFIER'] = 'ppeman.tests.test_notifications.RecordingNotifier'
    return RecordingNotifier


class TestRoster:

    def test_only_active_flagged_recipients(self, recipient):
        NotificationRecipient.objects.create(name='Off', email='off@example.com', is_active=False)
        NotificationRecipient.objects.create(
            name='Opted out', email='quiet@example.com', receives_stock_alerts=False,
        )
        NotificationRecipient.objects.create(name='Boss', email='boss@example.com')

        assert get_alert_roster() == ['admin@example.com', 'boss@example.com']


class TestDispatch:

    def test_mail_sent_after_commit(self, record, recipient, mailoutbox,
                                    django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            result = inventory.update_stock(record.station_id, record.item_id, 16, 'SUBTRACT')

        assert callbacks
        assert len(mailoutbox) == 1
        mail = mailoutbox[0]
        assert mail.subject == 'CRITICAL Stock Alert - Nitrile Gloves'
        assert mail.to == ['admin@example.com']
        assert mail.from_email == 'inventory@example.com'
        assert 'Workshop A' in mail.body
        assert 'Current stock: 4 units' in mail.body

        alert = InventoryAlert.objects.get(pk=result.alert_created.pk)
        assert alert.alert_sent

    def test_nothing_sent_before_commit(self, record, recipient, mailoutbox,
                                        django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            inventory.update_stock(record.station_id, record.item_id, 12, 'SUBTRACT')

        assert len(callbacks) == 2  # notification + audit
        assert mailoutbox == []

    def test_no_recipients_is_not_sent(self, record, mailoutbox,
                                       django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            result = inventory.update_stock(record.station_id, record.item_id, 12, 'SUBTRACT')

        assert mailoutbox == []
        assert not InventoryAlert.objects.get(pk=result.alert_created.pk).alert_sent

    def test_failure_is_swallowed(self, record, recipient, ppeman_config, caplog,
                                  django_capture_on_commit_callbacks):
        """A failing notifier does not undo the stock change or the alert."""
        ppeman_config['NOTIFIER'] = 'ppeman.tests.test_notifications.ExplodingNotifier'

        with django_capture_on_commit_callbacks(execute=True):
            result = inventory.update_stock(record.station_id, record.item_id, 12, 'SUBTRACT')

        record.refresh_from_db()
        assert record.current_stock == 8
        alert = InventoryAlert.objects.get(pk=result.alert_created.pk)
        assert not alert.alert_sent
        assert 'inventory.alert.notify_failed' in caplog.messages

    def test_custom_notifier_gets_notice(self, record, recipient, recording_notifier,
                                         django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            result = inventory.update_stock(record.station_id, record.item_id, 12, 'SUBTRACT')

        (notice, recipients), = recording_notifier.sent
        assert notice.alert_id == str(result.alert_created.pk)
        assert notice.alert_type == 'LOW_STOCK'
        assert notice.threshold_value == 10
        assert not notice.is_critical
        assert recipients == ['admin@example.com']

    def test_dispatch_unknown_alert_returns_false(self, db):
        assert dispatch_stock_alert('00000000-0000-0000-0000-000000000000') is False


class TestAdapters:

    def test_default_is_email(self):
        notifier = get_notifier()

        assert isinstance(notifier, EmailStockAlertNotifier)
        assert isinstance(notifier, StockAlertNotifier)

    def test_noop(self, ppeman_config):
        ppeman_config['NOTIFIER'] = 'ppeman.adapters.noop.NoopStockAlertNotifier'

        assert isinstance(get_notifier(), NoopStockAlertNotifier)

    def test_subject_levels(self, record):
        alert = InventoryAlert.objects.create(
            station=record.station, item=record.item, alert_type='LOW_STOCK',
            severity='WARNING', threshold_value=10, current_stock=8,
        )
        notice = build_notice(alert)

        assert isinstance(notice, StockAlertNotice)
        assert build_subject(notice) == 'LOW Stock Alert - Nitrile Gloves'
