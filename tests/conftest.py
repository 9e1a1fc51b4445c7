"""
Test configuration and fixtures
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from medstock.config.settings import Settings
from medstock.main import MedStock, create_context


class FixedClock:
    """Clock that only moves when told to"""

    def __init__(self, current: datetime):
        self.current = current

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FixedClock(datetime(2025, 3, 14, 15, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def settings(tmp_path):
    """File-backed SQLite so concurrent sessions really contend for the lock"""
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'medstock.db'}",
        lock_timeout_seconds=30,
        sale_retry_backoff_seconds=0,
    )


@pytest.fixture
def context(settings, clock):
    ctx = create_context(settings, clock)
    yield ctx
    ctx.dispose()


@pytest.fixture
def medstock(context):
    return MedStock(context)


@pytest.fixture
def make_medicine(medstock):
    """Create a medicine with sensible defaults, overridable per field"""

    def _make(**overrides):
        data = {
            "name": "Paracetamol 500mg",
            "generic_name": "Acetaminophen",
            "quantity_in_stock": 50,
            "reorder_level": 10,
            "unit_price": Decimal("2.50"),
        }
        data.update(overrides)
        return medstock.medicines.create_medicine(data)

    return _make
