from datetime import date
from decimal import Decimal

from src.core.models import DcaPlan
from src.schemas import SavedPlanPayload


def test_parses_camel_case_payload() -> None:
    saved = SavedPlanPayload.model_validate(
        {
            "type": "dca",
            "fundCode": "110011",
            "fundName": "易方达中小盘",
            "amount": 300,
            "feeRate": 0.15,
            "cycle": "weekly",
            "firstDate": "2024-05-17",
            "weeklyDay": 5,
            "monthlyDay": None,
            "enabled": False,
        }
    )
    assert saved.fund_code == "110011"
    assert saved.amount == "300"
    assert saved.fee_rate == "0.15"
    assert saved.cycle == "weekly"
    assert saved.first_date == date(2024, 5, 17)
    assert saved.weekly_day == 5
    assert saved.monthly_day is None
    assert saved.enabled is False


def test_accepts_snake_case_names() -> None:
    saved = SavedPlanPayload.model_validate({"fund_code": "110011", "monthly_day": 8, "first_date": "2024-06-08"})
    assert saved.fund_code == "110011"
    assert saved.monthly_day == 8
    assert saved.first_date == date(2024, 6, 8)


def test_malformed_fields_become_absent() -> None:
    saved = SavedPlanPayload.model_validate(
        {
            "amount": True,
            "feeRate": ["0.1"],
            "cycle": 3,
            "weeklyDay": "abc",
            "monthlyDay": 2.5,
            "firstDate": "not-a-date",
            "enabled": "true",
            "unknown": "ignored",
        }
    )
    assert saved.amount is None
    assert saved.fee_rate is None
    assert saved.cycle is None
    assert saved.weekly_day is None
    assert saved.monthly_day is None
    assert saved.first_date is None
    assert saved.enabled is None


def test_integral_float_selector_is_accepted() -> None:
    assert SavedPlanPayload.model_validate({"monthlyDay": 10.0}).monthly_day == 10


def test_datetime_string_keeps_calendar_date() -> None:
    saved = SavedPlanPayload.model_validate({"firstDate": "2024-07-05T00:00:00+08:00"})
    assert saved.first_date == date(2024, 7, 5)


def test_coerce_from_plan() -> None:
    plan = DcaPlan(
        fund_code="110011",
        fund_name="易方达中小盘",
        amount=Decimal("1000.00"),
        fee_rate=Decimal("0"),
        cycle="monthly",
        first_date=date(2024, 6, 10),
        weekly_day=None,
        monthly_day=10,
        enabled=True,
    )
    saved = SavedPlanPayload.coerce(plan)
    assert saved.amount == "1000.00"
    assert saved.monthly_day == 10
    assert saved.first_date == date(2024, 6, 10)
    assert SavedPlanPayload.coerce(saved) is saved
