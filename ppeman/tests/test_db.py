"""
Tests for the database readiness retry.
"""

import pytest

from ppeman import db as ppeman_db
from ppeman import inventory
from ppeman.exceptions import DatabaseNotReadyError, InsufficientStockError


@pytest.fixture
def no_sleep(monkeypatch):
    sleeps = []
    monkeypatch.setattr(ppeman_db.time, 'sleep', sleeps.append)
    return sleeps


def _flaky_readiness(monkeypatch, failures):
    calls = {'count': 0}

    def ensure(using='default'):
        calls['count'] += 1
        if calls['count'] <= failures:
            raise DatabaseNotReadyError(alias=using)

    monkeypatch.setattr(ppeman_db, 'ensure_database_ready', ensure)
    return calls


class TestWithDatabaseRetry:

    def test_runs_once_when_ready(self, monkeypatch, no_sleep):
        calls = _flaky_readiness(monkeypatch, failures=0)

        assert ppeman_db.with_database_retry(lambda: 'ok') == 'ok'
        assert calls['count'] == 1
        assert no_sleep == []

    def test_retries_until_ready(self, monkeypatch, no_sleep):
        calls = _flaky_readiness(monkeypatch, failures=2)
        ran = []

        result = ppeman_db.with_database_retry(lambda: ran.append(1) or 'ok', attempts=3, delay=0.5)

        assert result == 'ok'
        assert calls['count'] == 3
        assert no_sleep == [0.5, 0.5]
        assert ran == [1]

    def test_gives_up(self, monkeypatch, no_sleep, caplog):
        _flaky_readiness(monkeypatch, failures=10)
        ran = []

        with pytest.raises(DatabaseNotReadyError) as exc:
            ppeman_db.with_database_retry(lambda: ran.append(1), attempts=3, delay=0)

        assert exc.value.http_status == 503
        assert exc.value.code == 'DATABASE_NOT_READY'
        assert ran == []
        assert 'inventory.db.not_ready' in caplog.messages

    def test_business_errors_not_retried(self, monkeypatch, no_sleep):
        calls = _flaky_readiness(monkeypatch, failures=0)
        attempts = []

        def operation():
            attempts.append(1)
            raise InsufficientStockError(current_stock=0, requested=1)

        with pytest.raises(InsufficientStockError):
            ppeman_db.with_database_retry(operation, attempts=3, delay=0)

        assert attempts == [1]
        assert calls['count'] == 1

    def test_facade_surfaces_not_ready(self, monkeypatch, no_sleep):
        _flaky_readiness(monkeypatch, failures=10)

        with pytest.raises(DatabaseNotReadyError):
            inventory.inventory_stats()


@pytest.mark.django_db
def test_ensure_database_ready_with_live_connection():
    ppeman_db.ensure_database_ready()
