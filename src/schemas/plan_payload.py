"""
已保存定投计划的入参 Schema（Pydantic 模型）。

职责：
- 解析调用方保存的 camelCase 计划结构（编辑模式回填）
- 对缺失或格式不对的字段宽松处理：一律视为“未提供”（None）

设计原则：
- 不在此处做业务校验：周期是否合法、扣款日是否越界由表单回填逻辑决定
- 旧版本或部分字段缺失的计划也能被读取
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.models.dca_plan import DcaPlan


class SavedPlanPayload(BaseModel):
    """
    已保存的定投计划（所有字段可选）。

    字段别名与 `DcaPlan.to_payload()` 的输出一致，也接受 snake_case 字段名。
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    type: str | None = Field(None, description="计划类型，固定为 dca")
    fund_code: str | None = Field(None, alias="fundCode", description="基金代码")
    fund_name: str | None = Field(None, alias="fundName", description="基金名称")
    amount: str | None = Field(None, description="每次定投金额（文本）")
    fee_rate: str | None = Field(None, alias="feeRate", description="买入费率（百分比文本）")
    cycle: str | None = Field(None, description="定投周期")
    weekly_day: int | None = Field(None, alias="weeklyDay", description="扣款星期 1..5")
    monthly_day: int | None = Field(None, alias="monthlyDay", description="每月扣款日 1..28")
    first_date: date | None = Field(None, alias="firstDate", description="首次扣款日期 YYYY-MM-DD")
    enabled: bool | None = Field(None, description="是否启用")

    @field_validator("type", "fund_code", "fund_name", "cycle", mode="before")
    @classmethod
    def _text_or_none(cls, value: Any) -> str | None:
        if isinstance(value, str) and value:
            return value
        return None

    @field_validator("amount", "fee_rate", mode="before")
    @classmethod
    def _number_text(cls, value: Any) -> str | None:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        if isinstance(value, str):
            return value
        return None

    @field_validator("weekly_day", "monthly_day", mode="before")
    @classmethod
    def _integer_or_none(cls, value: Any) -> int | None:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return None

    @field_validator("first_date", mode="before")
    @classmethod
    def _iso_date_or_none(cls, value: Any) -> date | None:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str) and value:
            try:
                return date.fromisoformat(value[:10])
            except ValueError:
                return None
        return None

    @field_validator("enabled", mode="before")
    @classmethod
    def _strict_bool(cls, value: Any) -> bool | None:
        return value if isinstance(value, bool) else None

    @classmethod
    def from_plan(cls, plan: DcaPlan) -> SavedPlanPayload:
        """由已确认的计划对象构造（用于再次编辑）。"""
        return cls.model_validate(plan.to_payload())

    @classmethod
    def coerce(cls, source: SavedPlanPayload | DcaPlan | Mapping[str, Any]) -> SavedPlanPayload:
        """
        将调用方传入的任意计划形态统一为 SavedPlanPayload。

        Args:
            source: Schema 实例、DcaPlan 或 camelCase/snake_case 字典。
        """
        if isinstance(source, cls):
            return source
        if isinstance(source, DcaPlan):
            return cls.from_plan(source)
        return cls.model_validate(dict(source))
