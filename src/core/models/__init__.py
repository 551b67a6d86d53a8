from .dca_plan import (
    CYCLE_LABELS,
    CYCLES,
    MONTHLY_DAY_RANGE,
    SCHEDULE_HINT,
    WEEKDAY_LABELS,
    WEEKDAY_RANGE,
    WEEKLY_CYCLES,
    Cycle,
    DcaDraft,
    DcaPlan,
    describe_rule,
    is_monthly_day_selector,
    is_weekday_selector,
)
from .fund import FundRef

"""
领域模型聚合导出。

说明：
- 仅做名称聚合，不引入额外逻辑，便于上层模块统一引用；
- 现有代码可以继续从各子模块直接导入。
"""

__all__ = [
    # 基金
    "FundRef",
    # 定投计划
    "Cycle",
    "CYCLES",
    "WEEKLY_CYCLES",
    "CYCLE_LABELS",
    "WEEKDAY_RANGE",
    "WEEKDAY_LABELS",
    "MONTHLY_DAY_RANGE",
    "SCHEDULE_HINT",
    "DcaDraft",
    "DcaPlan",
    "describe_rule",
    "is_weekday_selector",
    "is_monthly_day_selector",
]
