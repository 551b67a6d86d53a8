"""
依赖容器模块（Dependency Container）。

职责：
- 集中管理依赖对象的创建逻辑，通过 @register 注册到依赖注入容器
- 时区解析器为进程级单例：启动后解析一次，之后只读

使用方式：
    # 1. 在 Flow 函数中自动注入
    @dependency
    def open_dca_form(*, fund, tz_resolver=None): ...

    # 2. 在 CLI 中直接调用工厂函数
    resolver = get_tz_resolver()

    # 3. 测试时手动传入替身，或 reset_tz_resolver() 清空单例

注意事项：
    - @register 的名字必须与 Flow 函数参数名一致
    - 本模块在 src/flows/__init__.py 中自动导入
"""

from __future__ import annotations

from src.core.dependency import register
from src.core.timezone import TimezoneResolver

# ========== 全局单例 ==========

_tz_resolver: TimezoneResolver | None = None


@register("tz_resolver")
def get_tz_resolver() -> TimezoneResolver:
    """
    获取时区解析器（单例模式）。

    Returns:
        TimezoneResolver 实例；首次调用时创建，时区在首次访问时解析。

    注册名：tz_resolver
    """
    global _tz_resolver
    if _tz_resolver is None:
        _tz_resolver = TimezoneResolver()
    return _tz_resolver


def reset_tz_resolver() -> None:
    """清空时区解析器单例（环境变量变化后或测试间隔离使用）。"""
    global _tz_resolver
    _tz_resolver = None
