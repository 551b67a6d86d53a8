from datetime import date, datetime, timezone

from src.core.container import get_tz_resolver, reset_tz_resolver
from src.core.timezone import TimezoneResolver, resolve_local_zone


def _utc_clock(dt: datetime):
    return lambda tz: dt.astimezone(tz)


def test_today_is_local_calendar_date() -> None:
    instant = datetime(2024, 5, 15, 20, 0, tzinfo=timezone.utc)
    shanghai = TimezoneResolver("Asia/Shanghai", clock=_utc_clock(instant))
    new_york = TimezoneResolver("America/New_York", clock=_utc_clock(instant))
    assert shanghai.today() == date(2024, 5, 16)
    assert new_york.today() == date(2024, 5, 15)


def test_explicit_name_wins(monkeypatch) -> None:
    monkeypatch.setenv("DCA_TIMEZONE", "Asia/Tokyo")
    assert TimezoneResolver("Europe/Berlin").zone_name == "Europe/Berlin"


def test_invalid_explicit_name_falls_back_to_environment(monkeypatch) -> None:
    monkeypatch.setenv("DCA_TIMEZONE", "Asia/Tokyo")
    assert TimezoneResolver("Not/AZone").zone_name == "Asia/Tokyo"


def test_override_env_beats_tz(monkeypatch) -> None:
    monkeypatch.setenv("DCA_TIMEZONE", "Asia/Tokyo")
    monkeypatch.setenv("TZ", "Europe/Berlin")
    assert str(resolve_local_zone()) == "Asia/Tokyo"


def test_tz_env_with_posix_colon(monkeypatch) -> None:
    monkeypatch.setenv("TZ", ":Europe/Berlin")
    assert str(resolve_local_zone()) == "Europe/Berlin"


def test_invalid_override_falls_through_to_tz(monkeypatch) -> None:
    monkeypatch.setenv("DCA_TIMEZONE", "Mars/Olympus")
    monkeypatch.setenv("TZ", "Europe/Berlin")
    assert str(resolve_local_zone()) == "Europe/Berlin"


def test_falls_back_to_default_zone(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("DCA_LOCALTIME_PATH", str(tmp_path / "missing"))
    assert str(resolve_local_zone()) == "Asia/Shanghai"


def test_zone_is_resolved_once(monkeypatch) -> None:
    monkeypatch.setenv("DCA_TIMEZONE", "Asia/Tokyo")
    resolver = TimezoneResolver()
    first = resolver.zone
    monkeypatch.setenv("DCA_TIMEZONE", "Europe/Berlin")
    assert resolver.zone is first
    assert resolver.zone_name == "Asia/Tokyo"


def test_container_returns_singleton(monkeypatch) -> None:
    monkeypatch.setenv("DCA_TIMEZONE", "Asia/Tokyo")
    resolver = get_tz_resolver()
    assert get_tz_resolver() is resolver
    assert resolver.zone_name == "Asia/Tokyo"

    reset_tz_resolver()
    assert get_tz_resolver() is not resolver
