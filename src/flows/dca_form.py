"""
定投设置表单状态（PlanFormState）。

职责：
- 独占持有可变草稿 DcaDraft，响应离散的用户输入事件
- 周期/扣款星期/扣款日任一变化时，同步重算首次扣款日期
- 编辑模式下从已保存计划回填；新建模式使用默认值
- 确认时再次校验，通过后生成不可变 DcaPlan 并回调 on_confirm（仅一次）

状态机：
    editing（初始，可修改）→ submitted（终态，确认成功后由调用方丢弃实例）

使用方式：
    form = DcaPlanForm(fund=FundRef("000001", "华夏成长"), today=resolver.today, on_confirm=save)
    form.set_amount("500")
    form.set_cycle("weekly")
    form.set_weekly_day(5)
    if form.is_valid:
        form.confirm()
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Any, Callable, Literal, Mapping, Union

from src.core.models.dca_plan import (
    CYCLES,
    MONTHLY_DAY_RANGE,
    WEEKDAY_RANGE,
    WEEKLY_CYCLES,
    DcaDraft,
    DcaPlan,
    is_monthly_day_selector,
    is_weekday_selector,
)
from src.core.models.fund import FundRef
from src.core.rules.dca_schedule import compute_first_date
from src.core.rules.dca_validation import ValidationResult, validate_draft
from src.core.rules.decimal_input import parse_decimal
from src.schemas.plan_payload import SavedPlanPayload

logger = logging.getLogger(__name__)

FormStatus = Literal["editing", "submitted"]
SavedPlanLike = Union[SavedPlanPayload, DcaPlan, Mapping[str, Any]]


class DcaPlanForm:
    """
    定投设置表单的唯一协调者。

    - fund: 目标基金（只读）
    - today: 返回“今天”的函数（通常为 `TimezoneResolver.today`）
    - plan: 已保存计划（编辑模式），None 表示新建
    - on_confirm: 确认成功时回调，参数为 DcaPlan
    - on_close: 取消时回调，无参数
    """

    def __init__(
        self,
        *,
        fund: FundRef,
        today: Callable[[], date],
        plan: SavedPlanLike | None = None,
        on_confirm: Callable[[DcaPlan], None] | None = None,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self.fund = fund
        self._today = today
        self._on_confirm = on_confirm
        self._on_close = on_close
        self._status: FormStatus = "editing"
        self._draft = self._initial_draft(plan)

    # ========== 只读视图 ==========

    @property
    def status(self) -> FormStatus:
        return self._status

    @property
    def draft(self) -> DcaDraft:
        """返回草稿副本，外部修改不影响表单。"""
        return replace(self._draft)

    @property
    def first_date(self) -> date | None:
        return self._draft.first_date

    @property
    def is_valid(self) -> bool:
        return self.validate().ok

    def validate(self) -> ValidationResult:
        return validate_draft(self._draft, self.fund)

    # ========== 用户输入 ==========

    def set_amount(self, text: str) -> None:
        self._ensure_editing()
        self._draft.amount = text

    def set_fee_rate(self, text: str) -> None:
        self._ensure_editing()
        self._draft.fee_rate = text

    def set_enabled(self, enabled: bool) -> None:
        self._ensure_editing()
        self._draft.enabled = enabled

    def toggle_enabled(self) -> bool:
        self.set_enabled(not self._draft.enabled)
        return self._draft.enabled

    def set_cycle(self, cycle: str) -> None:
        """
        切换定投周期并重算首次扣款日期。

        Raises:
            ValueError: 周期不在 daily/weekly/biweekly/monthly 之内。
        """
        self._ensure_editing()
        if cycle not in CYCLES:
            raise ValueError(f"未知定投周期：{cycle}")
        self._draft.cycle = cycle
        self._recompute()

    def set_weekly_day(self, day: int) -> None:
        self._ensure_editing()
        self._draft.weekly_day = day
        self._recompute()

    def set_monthly_day(self, day: int) -> None:
        self._ensure_editing()
        self._draft.monthly_day = day
        self._recompute()

    # ========== 提交 / 取消 ==========

    def confirm(self) -> DcaPlan | None:
        """
        确认提交。

        Returns:
            校验通过返回生成的 DcaPlan（并已回调 on_confirm）；未通过返回 None，不抛异常。

        Raises:
            RuntimeError: 表单已提交过。
        """
        self._ensure_editing()
        result = self.validate()
        if not result.ok:
            logger.info(f"[DcaForm] 提交被拦截：{result.reason}")
            return None

        plan = self._build_plan()
        self._status = "submitted"
        logger.info(f"[DcaForm] 定投计划已确认：{plan.fund_code} {plan.cycle} 首扣 {plan.first_date}")
        if self._on_confirm is not None:
            self._on_confirm(plan)
        return plan

    def cancel(self) -> None:
        """取消编辑：不校验、不产出计划，仅回调 on_close；草稿随实例由调用方丢弃。"""
        self._ensure_editing()
        logger.debug(f"[DcaForm] 取消编辑：{self.fund.code}")
        if self._on_close is not None:
            self._on_close()

    # ========== 私有辅助函数 ==========

    def _ensure_editing(self) -> None:
        if self._status != "editing":
            raise RuntimeError("定投表单已提交，不能再修改")

    def _recompute(self) -> None:
        d = self._draft
        d.first_date = compute_first_date(d.cycle, d.weekly_day, d.monthly_day, self._today())
        logger.debug(
            f"[DcaForm] 重算首扣日期：{d.cycle}/{d.weekly_day}/{d.monthly_day} -> {d.first_date}"
        )

    def _default_draft(self) -> DcaDraft:
        today = self._today()
        weekday = today.isoweekday()
        weekly_day = weekday if weekday in WEEKDAY_RANGE else 1
        monthly_day = today.day if today.day in MONTHLY_DAY_RANGE else 1
        return DcaDraft(
            amount="",
            fee_rate="0",
            cycle="monthly",
            weekly_day=weekly_day,
            monthly_day=monthly_day,
            first_date=compute_first_date("monthly", weekly_day, monthly_day, today),
            enabled=True,
        )

    def _initial_draft(self, plan: SavedPlanLike | None) -> DcaDraft:
        """
        构造初始草稿。

        编辑模式回填规则：
        - amount / fee_rate / enabled：存在即沿用
        - cycle 合法：沿用 cycle 及各自合法的扣款星期/扣款日；
          有已保存的首扣日期则沿用，否则按当前组合重算
        - cycle 缺失或非法：整体回退到新建默认（monthly），忽略已保存的扣款日
        """
        draft = self._default_draft()
        if plan is None:
            return draft

        saved = SavedPlanPayload.coerce(plan)
        if saved.amount is not None:
            draft.amount = saved.amount
        if saved.fee_rate is not None:
            draft.fee_rate = saved.fee_rate
        if saved.enabled is not None:
            draft.enabled = saved.enabled

        if saved.cycle not in CYCLES:
            logger.info(f"[DcaForm] 已保存计划周期无效（{saved.cycle}），回退到每月默认")
            return draft

        draft.cycle = saved.cycle
        if is_weekday_selector(saved.weekly_day):
            draft.weekly_day = saved.weekly_day
        if is_monthly_day_selector(saved.monthly_day):
            draft.monthly_day = saved.monthly_day

        if saved.first_date is not None:
            draft.first_date = saved.first_date
        else:
            draft.first_date = compute_first_date(
                draft.cycle, draft.weekly_day, draft.monthly_day, self._today()
            )
        return draft

    def _build_plan(self) -> DcaPlan:
        d = self._draft
        return DcaPlan(
            fund_code=self.fund.code,
            fund_name=self.fund.name,
            amount=parse_decimal(d.amount),
            fee_rate=parse_decimal(d.fee_rate),
            cycle=d.cycle,
            first_date=d.first_date,
            weekly_day=d.weekly_day if d.cycle in WEEKLY_CYCLES else None,
            monthly_day=d.monthly_day if d.cycle == "monthly" else None,
            enabled=d.enabled,
        )
