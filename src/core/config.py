from __future__ import annotations

import os

DEFAULT_TIMEZONE = "Asia/Shanghai"


def get_timezone_override() -> str | None:
    """
    返回显式指定的时区名称。

    Returns:
        IANA 时区名（如 `Asia/Shanghai`）；未配置返回 None。

    说明：从环境变量 `DCA_TIMEZONE` 读取，优先级高于系统时区。
    """
    value = os.getenv("DCA_TIMEZONE", "").strip()
    return value or None


def get_env_timezone() -> str | None:
    """返回 `TZ` 环境变量中的时区名（POSIX 写法 `:Asia/Shanghai` 去掉前导冒号）。"""
    value = os.getenv("TZ", "").strip().lstrip(":")
    return value or None


def get_localtime_path() -> str:
    """
    返回系统时区链接文件路径。

    Returns:
        默认 `/etc/localtime`（可由 `DCA_LOCALTIME_PATH` 覆盖，便于测试）。
    """
    return os.getenv("DCA_LOCALTIME_PATH", "/etc/localtime")


def is_debug() -> bool:
    """
    是否启用调试日志。

    Returns:
        True/False（由 `DCA_DEBUG=1` 控制）。
    """
    return os.getenv("DCA_DEBUG", "0") == "1"
