"""
边界数据 Schema 导出。

使用方式：
    from src.schemas import SavedPlanPayload
"""

from src.schemas.plan_payload import SavedPlanPayload

__all__ = [
    "SavedPlanPayload",
]
