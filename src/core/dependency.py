"""
依赖注入装饰器（Dependency Injection）。

职责：
- 通过 @register 登记依赖工厂（名称 = Flow 函数的参数名）
- 通过 @dependency 在调用时自动填充值为 None 的可注入参数
- 测试时可直接传入替身对象，显式传入的非 None 值不会被覆盖

使用示例：
    # 1. 注册依赖工厂（在 src/core/container.py 中）
    @register("tz_resolver")
    def get_tz_resolver() -> TimezoneResolver:
        return TimezoneResolver()

    # 2. 在 Flow 函数上使用装饰器
    @dependency
    def preview_first_date(*, cycle: str, tz_resolver: TimezoneResolver | None = None) -> date:
        return compute_first_date(cycle, None, None, tz_resolver.today())

    # 3. 测试时覆盖依赖
    preview_first_date(cycle="daily", tz_resolver=TimezoneResolver("UTC", clock=fixed))

注意事项：
- 注册名必须与函数参数名完全一致（大小写敏感）
- 注册在 src/flows/__init__.py 导入容器时触发
"""

from __future__ import annotations

import inspect
from functools import wraps
from typing import Any, Callable, TypeVar

# 依赖注册表：参数名 -> 工厂函数
_REGISTRY: dict[str, Callable[[], Any]] = {}

T = TypeVar("T")


def register(name: str) -> Callable[[Callable[[], T]], Callable[[], T]]:
    """
    装饰器：将工厂函数注册到依赖注入容器。

    Args:
        name: 注册名称，必须与目标函数的参数名完全一致。
    """

    def decorator(factory_func: Callable[[], T]) -> Callable[[], T]:
        _REGISTRY[name] = factory_func
        return factory_func

    return decorator


def dependency(func: Callable[..., T]) -> Callable[..., T]:
    """
    依赖注入装饰器：调用时为值为 None 的已注册参数创建实例。

    Args:
        func: 需要自动注入依赖的函数。

    Returns:
        包装后的函数。
    """
    sig = inspect.signature(func)

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        bound_args = sig.bind_partial(*args, **kwargs)
        # 注册表在调用时查询
        for param_name in sig.parameters:
            if param_name in _REGISTRY and bound_args.arguments.get(param_name) is None:
                kwargs[param_name] = _REGISTRY[param_name]()
        return func(*args, **kwargs)

    return wrapper

