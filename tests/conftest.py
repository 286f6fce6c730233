"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import sys
import os
from datetime import datetime
from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

import pytest

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Mock config module completely before any imports
config_mock = MagicMock()
config_mock.LANGUAGE = "en"  # For Localizator
config_mock.SELLER_ID = "seller_1"
config_mock.MARKET_ID = "market_1"
config_mock.DEFAULT_BUYER_DISPLAY_NAME = "Kunde"
config_mock.TIMEZONE = "Europe/Berlin"
config_mock.PICKUP_DAY = 4  # Friday
config_mock.DEADLINE_DAY = 2  # Wednesday
config_mock.DEADLINE_HOUR = 23
config_mock.DEADLINE_MINUTE = 59
config_mock.AVAILABLE_PICKUP_DATES_COUNT = 5
config_mock.LOG_LEVEL = "INFO"
config_mock.LOG_MASK_SECRETS = True
config_mock.LOG_RETENTION_DAYS = 5
config_mock.LOG_DIR = "logs"

sys.modules['config'] = config_mock

from models.buyer_profile import BuyerProfile
from models.order_schedule import OrderScheduleConfig
from models.ordered_product import OrderedProduct
from repositories.auth import InMemoryAuthRepository
from repositories.order import InMemoryOrderRepository
from repositories.profile import InMemoryProfileRepository
from services.basket_store import BasketStore
from services.order_synchronizer import OrderSynchronizer
from utils.order_date_utils import to_millis

BERLIN = ZoneInfo("Europe/Berlin")


class FrozenClock:
    """Clock returning a fixed, manually advanced time."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


# ============================================================================
# Schedule / time Fixtures
# ============================================================================

@pytest.fixture
def tz():
    return BERLIN


@pytest.fixture
def schedule():
    """Pickup on Friday, orders editable until Wednesday 23:59."""
    return OrderScheduleConfig(pickup_day=4, deadline_day=2, deadline_hour=23, deadline_minute=59)


@pytest.fixture
def clock():
    """Monday 2025-01-06 10:00 in Berlin."""
    return FrozenClock(datetime(2025, 1, 6, 10, 0, tzinfo=BERLIN))


@pytest.fixture
def pickup_date():
    """Friday 2025-01-10 as epoch millis."""
    return to_millis(datetime(2025, 1, 10, tzinfo=BERLIN))


@pytest.fixture
def next_pickup_date():
    """Friday 2025-01-17 as epoch millis."""
    return to_millis(datetime(2025, 1, 17, tzinfo=BERLIN))


# ============================================================================
# Product Fixtures
# ============================================================================

@pytest.fixture
def carrots():
    return OrderedProduct.create("carrots", "Karotten", "kg", 2.5, 1.0, weight_per_piece=0.25)


@pytest.fixture
def apples():
    return OrderedProduct.create("apples", "Äpfel", "kg", 3.2, 2.0, weight_per_piece=0.2)


@pytest.fixture
def radishes():
    return OrderedProduct.create("radishes", "Radieschen", "Bund", 1.5, 2.0)


# ============================================================================
# Collaborator Fixtures
# ============================================================================

@pytest.fixture
def buyer_profile():
    return BuyerProfile(id="buyer_1", display_name="Erika Mustermann", anonymous=False)


@pytest.fixture
def basket_store():
    return BasketStore()


@pytest.fixture
def order_repository(clock, tz, schedule):
    return InMemoryOrderRepository(clock=clock, tz=tz, schedule=schedule)


@pytest.fixture
def profile_repository(buyer_profile):
    return InMemoryProfileRepository(buyer_profile)


@pytest.fixture
def auth_repository():
    return InMemoryAuthRepository("buyer_1")


@pytest.fixture
def synchronizer(basket_store, order_repository, profile_repository, auth_repository, clock, tz, schedule):
    return OrderSynchronizer(
        basket_store,
        order_repository,
        profile_repository,
        auth_repository,
        seller_id="seller_1",
        market_id="market_1",
        schedule=schedule,
        tz=tz,
        clock=clock,
        lang="en"
    )
