"""
输入框数字文本解析。

金额/费率在编辑过程中可能为空、未输完或非法，解析失败一律返回 None，不抛异常。
"""

from decimal import Decimal, InvalidOperation


def parse_decimal(text: object) -> Decimal | None:
    """
    将输入框文本解析为有限 Decimal。

    Args:
        text: 原始输入（允许为空、未输完或非法）。

    Returns:
        解析成功返回 Decimal；空串、非数字、NaN、Infinity 均返回 None。
    """
    if text is None or isinstance(text, bool):
        return None
    raw = str(text).strip()
    if not raw:
        return None
    try:
        value = Decimal(raw)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value
