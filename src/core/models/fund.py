from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FundRef:
    """
    基金引用（外部传入，只读）。

    code 为空时定投计划无法通过校验。
    """

    code: str
    name: str = ""
