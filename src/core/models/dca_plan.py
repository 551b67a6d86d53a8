from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Literal

Cycle = Literal["daily", "weekly", "biweekly", "monthly"]

CYCLES: tuple[str, ...] = ("daily", "weekly", "biweekly", "monthly")
WEEKLY_CYCLES: tuple[str, ...] = ("weekly", "biweekly")

WEEKDAY_RANGE = range(1, 6)  # 1..5 = 周一..周五
MONTHLY_DAY_RANGE = range(1, 29)  # 1..28，避开大小月差异

CYCLE_LABELS: dict[str, str] = {
    "daily": "每日",
    "weekly": "每周",
    "biweekly": "每两周",
    "monthly": "每月",
}

WEEKDAY_LABELS: dict[int, str] = {
    1: "周一",
    2: "周二",
    3: "周三",
    4: "周四",
    5: "周五",
}

SCHEDULE_HINT = (
    "基于当前日期和所选周期/扣款日自动计算：每日=当天；"
    "每周/每两周=从今天起最近的所选工作日；每月=从今天起最近的所选日期（1-28日）。"
)


def is_weekday_selector(value: object) -> bool:
    """是否为合法的扣款星期（1..5，bool 不算数字）。"""
    return isinstance(value, int) and not isinstance(value, bool) and value in WEEKDAY_RANGE


def is_monthly_day_selector(value: object) -> bool:
    """是否为合法的每月扣款日（1..28，bool 不算数字）。"""
    return isinstance(value, int) and not isinstance(value, bool) and value in MONTHLY_DAY_RANGE


def describe_rule(cycle: str, weekly_day: int | None, monthly_day: int | None) -> str:
    """
    生成扣款规则的人话描述。

    示例：`每日`、`每周 周五`、`每两周 周一`、`每月 10日`。
    """
    label = CYCLE_LABELS.get(cycle, cycle)
    if cycle in WEEKLY_CYCLES and weekly_day is not None:
        return f"{label} {WEEKDAY_LABELS.get(weekly_day, str(weekly_day))}"
    if cycle == "monthly" and monthly_day is not None:
        return f"{label} {monthly_day}日"
    return label


@dataclass(slots=True)
class DcaDraft:
    """
    定投计划草稿（编辑中的可变状态）。

    - amount / fee_rate: 输入框中的原始文本，允许为空或尚未输完
    - first_date: 由排期规则推导，不可直接编辑；编辑模式下可暂时沿用已保存值
    """

    amount: str
    fee_rate: str
    cycle: str
    weekly_day: int
    monthly_day: int
    first_date: date | None
    enabled: bool = True


@dataclass(frozen=True, slots=True)
class DcaPlan:
    """
    定投计划（确认后生成，不可变）。

    说明：
    - 金额/费率使用 Decimal，禁止 float；fee_rate 为百分比（0.12 表示 0.12%）
    - weekly_day / monthly_day 互斥：weekly/biweekly 仅 weekly_day；monthly 仅 monthly_day；
      daily 两者均为 None
    - biweekly 的两周间隔不在此体现，由下游排期负责
    """

    fund_code: str
    fund_name: str
    amount: Decimal
    fee_rate: Decimal
    cycle: Cycle
    first_date: date
    weekly_day: int | None
    monthly_day: int | None
    enabled: bool = True
    type: Literal["dca"] = "dca"

    def to_payload(self) -> dict[str, Any]:
        """
        导出为调用方使用的 camelCase 结构。

        金额与费率保留 Decimal，由调用方决定序列化方式。
        """
        return {
            "type": self.type,
            "fundCode": self.fund_code,
            "fundName": self.fund_name,
            "amount": self.amount,
            "feeRate": self.fee_rate,
            "cycle": self.cycle,
            "firstDate": self.first_date.isoformat(),
            "weeklyDay": self.weekly_day,
            "monthlyDay": self.monthly_day,
            "enabled": self.enabled,
        }
