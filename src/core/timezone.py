"""
时区解析（TimeZoneResolver）。

职责：
- 进程内解析一次“本地日历时区”，供所有需要“今天”的模块使用
- 解析失败时回退到固定默认时区（Asia/Shanghai），永不抛错

解析顺序：
1. `DCA_TIMEZONE` 环境变量（显式配置）
2. `TZ` 环境变量
3. 系统时区链接 `/etc/localtime`
4. 默认 `Asia/Shanghai`；若时区库缺失，则使用固定 UTC+8 偏移

使用方式：
    resolver = TimezoneResolver()
    today = resolver.today()

    # 测试时注入固定时钟
    resolver = TimezoneResolver("Asia/Shanghai", clock=lambda tz: fixed_dt.astimezone(tz))
"""

from __future__ import annotations

import logging
import os
from datetime import date, datetime, timedelta, timezone, tzinfo
from functools import cached_property
from typing import Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.core.config import (
    DEFAULT_TIMEZONE,
    get_env_timezone,
    get_localtime_path,
    get_timezone_override,
)

logger = logging.getLogger(__name__)

Clock = Callable[[tzinfo], datetime]

# 时区库不可用时的兜底：与默认时区同偏移（中国无夏令时）
_FALLBACK_ZONE = timezone(timedelta(hours=8), DEFAULT_TIMEZONE)


def _load_zone(name: str | None) -> tzinfo | None:
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as err:
        logger.warning(f"[Timezone] 无法识别时区 {name!r}: {err}")
        return None


def _zone_from_localtime(path: str) -> tzinfo | None:
    """从系统时区链接推断时区：优先取链接目标中的 IANA 名，否则直接读取文件。"""
    if not os.path.exists(path):
        return None
    real = os.path.realpath(path)
    marker = "zoneinfo" + os.sep
    if marker in real:
        zone = _load_zone(real.split(marker, 1)[1])
        if zone is not None:
            return zone
    try:
        with open(path, "rb") as fh:
            return ZoneInfo.from_file(fh, key="localtime")
    except (OSError, ValueError) as err:
        logger.warning(f"[Timezone] 读取 {path} 失败: {err}")
        return None


def resolve_local_zone() -> tzinfo:
    """
    按解析顺序确定本地时区。

    Returns:
        tzinfo 对象；所有来源都不可用时返回默认时区。
    """
    for source, candidate in (
        ("DCA_TIMEZONE", lambda: _load_zone(get_timezone_override())),
        ("TZ", lambda: _load_zone(get_env_timezone())),
        ("localtime", lambda: _zone_from_localtime(get_localtime_path())),
    ):
        zone = candidate()
        if zone is not None:
            logger.debug(f"[Timezone] 使用 {source} 解析到时区: {zone}")
            return zone

    zone = _load_zone(DEFAULT_TIMEZONE)
    if zone is None:
        logger.warning(f"[Timezone] 时区库缺失，使用固定偏移 {_FALLBACK_ZONE}")
        return _FALLBACK_ZONE
    logger.debug(f"[Timezone] 回退到默认时区: {DEFAULT_TIMEZONE}")
    return zone


class TimezoneResolver:
    """
    本地时区与“今天”的提供者。

    - name: 显式时区名；为 None 时按 `resolve_local_zone()` 的顺序解析
    - clock: 时钟函数 `(tz) -> aware datetime`，默认 `datetime.now`

    时区在首次访问时解析并缓存，之后只读。
    """

    def __init__(self, name: str | None = None, *, clock: Clock | None = None) -> None:
        self._name = name
        self._clock: Clock = clock or datetime.now

    @cached_property
    def zone(self) -> tzinfo:
        if self._name is not None:
            zone = _load_zone(self._name)
            if zone is not None:
                return zone
        return resolve_local_zone()

    @property
    def zone_name(self) -> str:
        return str(self.zone)

    def now(self) -> datetime:
        return self._clock(self.zone)

    def today(self) -> date:
        """返回解析时区下当天的日历日期（零点对齐）。"""
        return self.now().astimezone(self.zone).date()
