from datetime import date

import src.core.container as container
from src.flows.dca import open_dca_form, preview_first_date


def test_open_form_uses_injected_resolver(fund, make_resolver) -> None:
    emitted = []
    form = open_dca_form(fund=fund, on_confirm=emitted.append, tz_resolver=make_resolver(date(2024, 5, 31)))
    assert form.draft.monthly_day == 1
    assert form.first_date == date(2024, 6, 1)

    form.set_amount("100")
    form.confirm()
    assert len(emitted) == 1


def test_open_form_falls_back_to_container_resolver(fund, make_resolver, monkeypatch) -> None:
    monkeypatch.setattr(container, "_tz_resolver", make_resolver(date(2024, 5, 18)))
    form = open_dca_form(fund=fund, plan={"cycle": "weekly"})
    assert form.first_date == date(2024, 5, 20)


def test_preview_with_explicit_today() -> None:
    assert preview_first_date(cycle="monthly", monthly_day=10, today=date(2024, 5, 15)) == date(2024, 6, 10)


def test_preview_uses_resolver_today(make_resolver, monkeypatch) -> None:
    monkeypatch.setattr(container, "_tz_resolver", make_resolver(date(2024, 5, 15)))
    assert preview_first_date(cycle="weekly", weekly_day=5) == date(2024, 5, 17)
    assert preview_first_date(cycle="daily") == date(2024, 5, 15)
