"""CLI 输出工具：面向用户的单行提示统一从这里打印。"""

from __future__ import annotations

import sys


def log(message: str) -> None:
    """打印一行面向用户的提示信息到 stdout。"""
    print(message, file=sys.stdout, flush=True)
