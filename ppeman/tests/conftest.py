"""
Pytest fixtures for Ppeman tests.
"""

import pytest
from django.contrib.auth import get_user_model

from ppeman.adapters import reset_adapters
from ppeman.models import InventoryRecord, NotificationRecipient, PPEItem, Station


User = get_user_model()


@pytest.fixture(autouse=True)
def _fresh_adapters():
    """Adapters are cached per process; settings overrides need a clean slate."""
    reset_adapters()
    yield
    reset_adapters()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username='safety-officer',
        password='testpass123'
    )


@pytest.fixture
def station(db):
    """Create a test station."""
    return Station.objects.create(
        name='Workshop A',
        location='Building 2, ground floor',
    )


@pytest.fixture
def other_station(db):
    """Create a second station."""
    return Station.objects.create(
        name='Loading Dock',
        location='Building 5',
    )


@pytest.fixture
def gloves(db):
    """Create a PPE item."""
    return PPEItem.objects.create(
        name='Nitrile Gloves',
        category='gloves',
        min_threshold=10,
    )


@pytest.fixture
def goggles(db):
    """Create a second PPE item."""
    return PPEItem.objects.create(
        name='Safety Goggles',
        category='eye protection',
        min_threshold=8,
    )


@pytest.fixture
def record(db, station, gloves):
    """Gloves at Workshop A: min 10, critical 5, stock 20 (GOOD)."""
    return InventoryRecord.objects.create(
        station=station,
        item=gloves,
        current_stock=20,
        min_threshold=10,
        critical_threshold=5,
    )


@pytest.fixture
def recipient(db):
    """Create a recipient on the stock alert roster."""
    return NotificationRecipient.objects.create(
        name='Site Admin',
        email='admin@example.com',
    )


@pytest.fixture
def ppeman_config(settings):
    """Mutable PPEMAN settings for a single test."""
    settings.PPEMAN = {
        **settings.PPEMAN,
    }
    return settings.PPEMAN
