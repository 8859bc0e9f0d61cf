"""
Unit tests for parameter validation helpers.
"""
# 说明：ensure / ensure_type 的单元测试。

import pytest

from dphist.core.utils import ParamValidationError, ensure, ensure_type


def test_ensure_raises_default_and_custom_errors() -> None:
    ensure(True, "unused")
    with pytest.raises(ParamValidationError, match="boom"):
        ensure(False, "boom")
    with pytest.raises(KeyError):
        ensure(False, "boom", error=KeyError)


def test_ensure_type_reports_label() -> None:
    ensure_type(1.5, (int, float), label="epsilon")
    with pytest.raises(ParamValidationError, match="epsilon must be instance of int, float"):
        ensure_type("1.5", (int, float), label="epsilon")


def test_ensure_type_rejects_bool_for_numbers() -> None:
    # bool 是 int 的子类，但数值参数不接受 True/False
    with pytest.raises(ParamValidationError):
        ensure_type(True, (int,), label="level")
    ensure_type(True, (bool,), label="flag")


def test_param_validation_error_is_value_error() -> None:
    assert issubclass(ParamValidationError, ValueError)
