from __future__ import annotations

import logging
from dataclasses import dataclass

from src.core.models.dca_plan import (
    CYCLES,
    WEEKLY_CYCLES,
    DcaDraft,
    is_monthly_day_selector,
    is_weekday_selector,
)
from src.core.models.fund import FundRef
from src.core.rules.decimal_input import parse_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """
    草稿校验结果。

    reason 仅供展示，不作为机器可读的错误码。
    """

    ok: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.ok


VALID = ValidationResult(ok=True)


def validate_draft(draft: DcaDraft, fund: FundRef | None) -> ValidationResult:
    """
    校验定投草稿是否可提交（纯函数）。

    规则（按顺序，首个不满足的规则给出原因）：
    - 基金代码非空
    - 金额为大于 0 的数字
    - 费率为大于等于 0 的数字
    - 周期为 daily/weekly/biweekly/monthly 之一
    - weekly/biweekly 需扣款星期 1..5；monthly 需扣款日 1..28
    - 首次扣款日期已计算

    Args:
        draft: 当前草稿。
        fund: 基金引用（None 视为缺少基金代码）。

    Returns:
        ValidationResult；不抛异常，非法数字文本视为校验不通过。
    """
    result = _check(draft, fund)
    if not result.ok:
        logger.debug(f"[DcaValidation] 校验未通过: {result.reason}")
    return result


def _check(draft: DcaDraft, fund: FundRef | None) -> ValidationResult:
    if fund is None or not fund.code:
        return ValidationResult(False, "缺少基金代码")

    amount = parse_decimal(draft.amount)
    if amount is None or amount <= 0:
        return ValidationResult(False, "定投金额必须大于 0")

    fee_rate = parse_decimal(draft.fee_rate)
    if fee_rate is None or fee_rate < 0:
        return ValidationResult(False, "买入费率必须为不小于 0 的数字")

    if draft.cycle not in CYCLES:
        return ValidationResult(False, f"未知定投周期：{draft.cycle}")

    if draft.cycle in WEEKLY_CYCLES and not is_weekday_selector(draft.weekly_day):
        return ValidationResult(False, "扣款星期必须为周一至周五（1-5）")

    if draft.cycle == "monthly" and not is_monthly_day_selector(draft.monthly_day):
        return ValidationResult(False, "每月扣款日必须为 1-28 日")

    if draft.first_date is None:
        return ValidationResult(False, "首次扣款日期未计算")

    return VALID
