"""
Small validation helpers shared by the calibrator, mechanisms and config.
"""
# 说明：参数校验辅助函数，在库内部统一进行轻量级参数检查。
# 职责：
# - ParamValidationError：参数校验失败时抛出的异常类型
# - ensure：基于布尔条件触发校验错误的轻量断言工具
# - ensure_type：检查参数类型，并在失败时给出带 label 的错误提示

from __future__ import annotations

from typing import Any, Tuple, Type


class ParamValidationError(ValueError):
    """Raised when parameter validation fails."""


def ensure(condition: bool, message: str, *, error: Type[Exception] = ParamValidationError) -> None:
    # 条件不满足时抛出指定的异常类型（默认使用 ParamValidationError）
    if not condition:
        raise error(message)


def ensure_type(value: Any, expected: Tuple[type, ...], *, label: str = "value") -> None:
    # bool 是 int 的子类，数值参数不接受 True/False
    rejected_bool = isinstance(value, bool) and bool not in expected
    if rejected_bool or not isinstance(value, expected):
        names = ", ".join(t.__name__ for t in expected)
        raise ParamValidationError(f"{label} must be instance of {names}")
