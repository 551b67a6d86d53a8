"""定投计划配置相关业务流程。"""

from __future__ import annotations

from datetime import date
from typing import Callable

from src.core.dependency import dependency
from src.core.models import DcaPlan, FundRef
from src.core.rules.dca_schedule import compute_first_date
from src.core.timezone import TimezoneResolver
from src.flows.dca_form import DcaPlanForm, SavedPlanLike


@dependency
def open_dca_form(
    *,
    fund: FundRef,
    plan: SavedPlanLike | None = None,
    on_confirm: Callable[[DcaPlan], None] | None = None,
    on_close: Callable[[], None] | None = None,
    tz_resolver: TimezoneResolver | None = None,
) -> DcaPlanForm:
    """
    打开定投设置表单。

    Args:
        fund: 目标基金。
        plan: 已保存计划（编辑模式）；None 表示新建。
        on_confirm: 确认成功时的回调（仅调用一次）。
        on_close: 取消时的回调。
        tz_resolver: 时区解析器（可选，自动注入）。

    Returns:
        处于 editing 状态的表单。
    """
    # tz_resolver 已通过装饰器自动注入
    return DcaPlanForm(
        fund=fund,
        today=tz_resolver.today,
        plan=plan,
        on_confirm=on_confirm,
        on_close=on_close,
    )


@dependency
def preview_first_date(
    *,
    cycle: str,
    weekly_day: int | None = None,
    monthly_day: int | None = None,
    today: date | None = None,
    tz_resolver: TimezoneResolver | None = None,
) -> date:
    """
    预览某个周期/扣款日组合的首次扣款日期。

    Args:
        cycle: 定投周期。
        weekly_day: 扣款星期（1..5），可选。
        monthly_day: 每月扣款日（1..28），可选。
        today: 指定“今天”；None 时取解析时区下的今天。
        tz_resolver: 时区解析器（可选，自动注入）。
    """
    base = today if today is not None else tz_resolver.today()
    return compute_first_date(cycle, weekly_day, monthly_day, base)
