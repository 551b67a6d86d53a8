from dataclasses import replace
from datetime import date

import pytest

from src.core.models import DcaDraft, FundRef
from src.core.rules.dca_validation import validate_draft
from src.core.rules.decimal_input import parse_decimal


@pytest.fixture
def draft() -> DcaDraft:
    return DcaDraft(
        amount="500",
        fee_rate="0.15",
        cycle="monthly",
        weekly_day=3,
        monthly_day=15,
        first_date=date(2024, 5, 15),
        enabled=True,
    )


def test_valid_draft(draft, fund) -> None:
    result = validate_draft(draft, fund)
    assert result.ok
    assert result.reason is None
    assert bool(result)


@pytest.mark.parametrize("amount", ["0", "-1", "", "   ", "abc", "NaN", "Infinity", "1e"])
def test_rejects_bad_amount(draft, fund, amount) -> None:
    result = validate_draft(replace(draft, amount=amount), fund)
    assert not result.ok
    assert "金额" in result.reason


@pytest.mark.parametrize("fee_rate", ["-1", "-0.01", "", "x", "nan", "-inf"])
def test_rejects_bad_fee_rate(draft, fund, fee_rate) -> None:
    result = validate_draft(replace(draft, fee_rate=fee_rate), fund)
    assert not result.ok
    assert "费率" in result.reason


@pytest.mark.parametrize("fee_rate", ["0", "0.00", " 1.5 "])
def test_accepts_zero_and_positive_fee_rate(draft, fund, fee_rate) -> None:
    assert validate_draft(replace(draft, fee_rate=fee_rate), fund).ok


def test_rejects_unknown_cycle(draft, fund) -> None:
    result = validate_draft(replace(draft, cycle="yearly"), fund)
    assert not result.ok
    assert "yearly" in result.reason


@pytest.mark.parametrize("cycle", ["weekly", "biweekly"])
@pytest.mark.parametrize("weekly_day", [0, 6, 7])
def test_rejects_weekday_out_of_range(draft, fund, cycle, weekly_day) -> None:
    assert not validate_draft(replace(draft, cycle=cycle, weekly_day=weekly_day), fund).ok


@pytest.mark.parametrize("monthly_day", [0, 29, 31])
def test_rejects_monthly_day_out_of_range(draft, fund, monthly_day) -> None:
    assert not validate_draft(replace(draft, monthly_day=monthly_day), fund).ok


def test_selector_of_other_cycle_is_not_checked(draft, fund) -> None:
    assert validate_draft(replace(draft, cycle="weekly", weekly_day=5, monthly_day=31), fund).ok
    assert validate_draft(replace(draft, cycle="monthly", weekly_day=9), fund).ok
    assert validate_draft(replace(draft, cycle="daily", weekly_day=9, monthly_day=31), fund).ok


@pytest.mark.parametrize("bad_fund", [None, FundRef(code="", name="无代码")])
def test_rejects_missing_fund_code(draft, bad_fund) -> None:
    result = validate_draft(draft, bad_fund)
    assert not result.ok
    assert "基金代码" in result.reason


def test_rejects_missing_first_date(draft, fund) -> None:
    assert not validate_draft(replace(draft, first_date=None), fund).ok


class TestParseDecimal:
    @pytest.mark.parametrize(
        "text,expected",
        [("100", "100"), (" 12.5 ", "12.5"), ("12.", "12"), ("1e3", "1000"), ("-3", "-3")],
    )
    def test_parses_numbers(self, text, expected) -> None:
        assert parse_decimal(text) == parse_decimal(expected)
        assert parse_decimal(text) is not None

    @pytest.mark.parametrize("text", [None, "", ".", "-", "12a", "NaN", "inf", True])
    def test_tolerates_partial_or_bad_input(self, text) -> None:
        assert parse_decimal(text) is None
