from __future__ import annotations

from datetime import date, timedelta

from src.core.models.dca_plan import (
    WEEKLY_CYCLES,
    WEEKDAY_RANGE,
    is_monthly_day_selector,
    is_weekday_selector,
)


def compute_first_date(
    cycle: str,
    weekly_day: int | None,
    monthly_day: int | None,
    today: date,
) -> date:
    """
    计算定投首次扣款日期（纯函数，无副作用）。

    规则：
    - daily: 当天
    - weekly / biweekly: 从今天起（含今天）最近的所选工作日；
      未选或非法时取今天的星期，今天为周末则默认周一
    - monthly: 从今天起（含今天）最近的所选日期（1..28）；
      未选或非法时取 min(28, 今天几号)；当月已过则顺延到下月同日

    biweekly 与 weekly 首扣规则一致，两周间隔由下游排期负责。

    Args:
        cycle: 定投周期；未知取值按 daily 处理。
        weekly_day: 扣款星期（1=周一..5=周五），可为 None。
        monthly_day: 每月扣款日（1..28），可为 None。
        today: 解析时区下的今天。

    Returns:
        首次扣款日期。
    """
    if cycle in WEEKLY_CYCLES:
        return _next_weekday(today, weekly_day)
    if cycle == "monthly":
        return _next_monthly_day(today, monthly_day)
    return today


def _next_weekday(today: date, weekly_day: int | None) -> date:
    if is_weekday_selector(weekly_day):
        target = weekly_day
    elif today.isoweekday() in WEEKDAY_RANGE:
        target = today.isoweekday()
    else:
        # 周末且未设定，默认周一
        target = 1
    offset = (target - today.isoweekday()) % 7
    return today + timedelta(days=offset)


def _next_monthly_day(today: date, monthly_day: int | None) -> date:
    day = monthly_day if is_monthly_day_selector(monthly_day) else min(28, today.day)
    candidate = today.replace(day=day)
    if candidate < today:
        if today.month == 12:
            candidate = date(today.year + 1, 1, day)
        else:
            candidate = date(today.year, today.month + 1, day)
    return candidate
