"""
Session state and the pure state-transition function.

The interactive loop is reduced to ``transition(state, action)`` applied
repeatedly; nothing here performs I/O, samples noise or reads the dataset.
"""
# 说明：会话状态与纯状态转移函数。
# 职责：
# - Field / Action：可切换的聚合字段与用户动作的封闭枚举
# - NoiseState：不可变的会话状态（字段、机制、噪声等级）
# - transition(...)：NoiseState × Action → NoiseState，不涉及任何 I/O，便于独立测试

from __future__ import annotations

import enum
from dataclasses import dataclass, replace

from dphist.cdp.mechanisms.noise import MechanismType
from dphist.cdp.sensitivity.noise_calibrator import PrivacyCalibrator
from dphist.core.utils.param_validation import ParamValidationError


class Field(enum.Enum):
    """Fields the session can aggregate over."""

    EDUCATION = "education"
    INCOME = "income"

    def toggle(self) -> "Field":
        return Field.INCOME if self is Field.EDUCATION else Field.EDUCATION

    @classmethod
    def from_str(cls, name: str) -> "Field":
        normalized = name.strip().lower()
        if normalized == "educ":
            normalized = "education"
        try:
            return cls(normalized)
        except ValueError as exc:
            raise ParamValidationError(f"unknown field '{name}'") from exc


class Action(enum.Enum):
    """User actions the session reacts to."""

    SWITCH_FIELD = "switch_field"
    SWITCH_MECHANISM = "switch_mechanism"
    INCREASE_NOISE = "increase_noise"
    DECREASE_NOISE = "decrease_noise"
    QUIT = "quit"


@dataclass(frozen=True)
class NoiseState:
    field: Field = Field.EDUCATION
    mechanism: MechanismType = MechanismType.LAPLACE
    noise_level: int = 0


def initial_state(
    calibrator: PrivacyCalibrator,
    *,
    field: Field = Field.EDUCATION,
    mechanism: MechanismType = MechanismType.LAPLACE,
) -> NoiseState:
    """Default state: least noise on the education field under Laplace."""
    return NoiseState(field=field, mechanism=mechanism, noise_level=calibrator.min_level)


def transition(state: NoiseState, action: Action, calibrator: PrivacyCalibrator) -> NoiseState:
    """Return the state that follows `state` after `action`."""
    # 每个分支只改动一个分量，其余分量保持不变
    if action is Action.SWITCH_FIELD:
        return replace(state, field=state.field.toggle())
    if action is Action.SWITCH_MECHANISM:
        return replace(state, mechanism=state.mechanism.toggle())
    if action is Action.INCREASE_NOISE:
        return replace(state, noise_level=calibrator.increase(state.noise_level))
    if action is Action.DECREASE_NOISE:
        return replace(state, noise_level=calibrator.decrease(state.noise_level))
    if action is Action.QUIT:
        return state
    raise ParamValidationError(f"unsupported action '{action}'")
