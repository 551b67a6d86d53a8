from datetime import date, datetime, time, tzinfo

import pytest

from src.core.container import reset_tz_resolver
from src.core.models import FundRef
from src.core.timezone import TimezoneResolver


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep host timezone settings out of the tests."""
    monkeypatch.delenv("DCA_TIMEZONE", raising=False)
    monkeypatch.delenv("TZ", raising=False)
    monkeypatch.delenv("DCA_DEBUG", raising=False)
    reset_tz_resolver()
    yield
    reset_tz_resolver()


@pytest.fixture
def make_resolver():
    """Build a resolver whose clock is pinned to 09:30 on the given day."""

    def _make(day: date, zone: str = "Asia/Shanghai") -> TimezoneResolver:
        def clock(tz: tzinfo) -> datetime:
            return datetime.combine(day, time(9, 30), tzinfo=tz)

        return TimezoneResolver(zone, clock=clock)

    return _make


@pytest.fixture
def fund() -> FundRef:
    return FundRef(code="000001", name="华夏成长混合")
