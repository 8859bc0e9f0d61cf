"""
Noise calibration based on sensitivity and a stepped privacy budget.

Provides the standard calibration formulas for the Laplace and Gaussian
mechanisms, plus the noise-level schedule that turns the user's discrete
"noise level" into an effective epsilon.

Responsibilities
  - Provide calibration formulas for the supported mechanisms.
  - Map an integer noise level to epsilon, strictly decreasing in level.
  - Clamp level adjustments to the configured bounds.

Limitations
  - Uses the standard 1.25 constant for Gaussian calibration.
  - Each call calibrates a single release; no budget is accumulated.
"""
# 说明：基于查询敏感度与分级隐私预算的噪声校准工具。
# 职责：
# - calibrate_laplace / calibrate_gaussian：标准校准公式 b = Δ/ε，σ = Δ·sqrt(2·ln(1.25/δ))/ε
# - NoiseLevelSchedule：ε(level) = base_epsilon / decay^(level - min_level)，等级越高 ε 越小、噪声越大
# - PrivacyCalibrator：按机制与噪声等级给出尺度参数，并对等级调整做边界裁剪
# 约定：
# - 计数查询的敏感度固定为 1
# - 超出范围的等级静默裁剪到边界，从不报错

from __future__ import annotations

import math
from dataclasses import dataclass

from dphist.cdp.mechanisms.noise import MechanismType
from dphist.core.utils.config import RuntimeConfig
from dphist.core.utils.param_validation import ParamValidationError, ensure, ensure_type

COUNT_SENSITIVITY = 1.0
DEFAULT_DELTA = 1e-5


def calibrate_laplace(epsilon: float, *, sensitivity: float) -> float:
    """Return Laplace scale (b) for given epsilon and sensitivity."""
    # b = sensitivity / epsilon
    ensure_type(epsilon, (int, float), label="epsilon")
    ensure_type(sensitivity, (int, float), label="sensitivity")
    ensure(epsilon > 0, "epsilon must be positive")
    ensure(sensitivity > 0, "sensitivity must be positive")
    return float(sensitivity) / float(epsilon)


def calibrate_gaussian(epsilon: float, delta: float, *, sensitivity: float) -> float:
    """Return Gaussian sigma for (epsilon, delta)-DP using the common 1.25 bound."""
    # σ = sensitivity * sqrt(2 * ln(1.25 / δ)) / epsilon
    ensure_type(epsilon, (int, float), label="epsilon")
    ensure_type(delta, (int, float), label="delta")
    ensure_type(sensitivity, (int, float), label="sensitivity")
    ensure(epsilon > 0, "epsilon must be positive")
    ensure(0 < delta < 1, "delta must be in (0,1)")
    ensure(sensitivity > 0, "sensitivity must be positive")
    return float(sensitivity) * math.sqrt(2.0 * math.log(1.25 / float(delta))) / float(epsilon)


@dataclass(frozen=True)
class NoiseLevelSchedule:
    """
    Map integer noise levels onto an effective privacy budget.

    - Configuration
      - base_epsilon: Epsilon at ``min_level`` (the least noisy setting).
      - decay: Factor epsilon is divided by per level; must exceed 1.
      - min_level / max_level: Inclusive bounds of the level range.

    - Behavior
      - ``epsilon(level) = base_epsilon / decay ** (level - min_level)``.
      - Levels outside the range are clamped before mapping.
    """

    base_epsilon: float = 10.0
    decay: float = 2.0
    min_level: int = 0
    max_level: int = 10

    def __post_init__(self) -> None:
        ensure_type(self.base_epsilon, (int, float), label="base_epsilon")
        ensure_type(self.decay, (int, float), label="decay")
        ensure_type(self.min_level, (int,), label="min_level")
        ensure_type(self.max_level, (int,), label="max_level")
        ensure(math.isfinite(self.base_epsilon) and self.base_epsilon > 0, "base_epsilon must be a positive finite number")
        ensure(math.isfinite(self.decay) and self.decay > 1, "decay must be a finite number greater than 1")
        ensure(self.min_level <= self.max_level, "min_level must not exceed max_level")
        # 最高等级的 ε 必须可表示且为正
        try:
            smallest = self.epsilon(self.max_level)
        except OverflowError as exc:
            raise ParamValidationError("noise level schedule overflows at max_level") from exc
        ensure(smallest > 0, "noise level schedule underflows to epsilon 0 at max_level")

    def clamp(self, level: int) -> int:
        return max(self.min_level, min(self.max_level, int(level)))

    def epsilon(self, level: int) -> float:
        steps = self.clamp(level) - self.min_level
        return float(self.base_epsilon) / float(self.decay) ** steps

    @property
    def levels(self) -> range:
        return range(self.min_level, self.max_level + 1)


class PrivacyCalibrator:
    """
    Derive the noise scale for the active mechanism and noise level.

    - Configuration
      - schedule: NoiseLevelSchedule mapping levels to epsilon.
      - sensitivity: Query sensitivity; 1 for count queries.
      - delta: Failure probability for Gaussian calibration, in (0, 1).

    - Behavior
      - ``scale_for`` applies the exact Laplace or Gaussian identity.
      - ``increase`` / ``decrease`` step the level by one and stay in bounds.
    """

    def __init__(
        self,
        schedule: NoiseLevelSchedule | None = None,
        *,
        sensitivity: float = COUNT_SENSITIVITY,
        delta: float = DEFAULT_DELTA,
    ):
        self.schedule = schedule or NoiseLevelSchedule()
        ensure_type(sensitivity, (int, float), label="sensitivity")
        ensure_type(delta, (int, float), label="delta")
        ensure(sensitivity > 0, "sensitivity must be positive")
        ensure(0 < delta < 1, "delta must be in (0,1)")
        self.sensitivity = float(sensitivity)
        self.delta = float(delta)
        # 尺度随等级单调，检查两端即可覆盖整个等级区间
        for mechanism in MechanismType:
            for level in (self.min_level, self.max_level):
                try:
                    scale = self.scale_for(mechanism, level)
                except OverflowError as exc:
                    raise ParamValidationError(f"{mechanism.value} scale overflows at level {level}") from exc
                ensure(
                    math.isfinite(scale) and scale > 0,
                    f"{mechanism.value} scale at level {level} is not a positive finite number",
                )

    @classmethod
    def from_config(cls, config: RuntimeConfig) -> "PrivacyCalibrator":
        config.validate()
        schedule = NoiseLevelSchedule(
            base_epsilon=config.base_epsilon,
            decay=config.epsilon_decay,
            min_level=config.min_level,
            max_level=config.max_level,
        )
        return cls(schedule, delta=config.delta)

    @property
    def min_level(self) -> int:
        return self.schedule.min_level

    @property
    def max_level(self) -> int:
        return self.schedule.max_level

    def clamp(self, level: int) -> int:
        return self.schedule.clamp(level)

    def increase(self, level: int) -> int:
        return self.clamp(level + 1)

    def decrease(self, level: int) -> int:
        return self.clamp(level - 1)

    def epsilon_for(self, level: int) -> float:
        return self.schedule.epsilon(level)

    def scale_for(self, mechanism: MechanismType, level: int) -> float:
        """Return the positive noise scale for `mechanism` at `level`."""
        epsilon = self.epsilon_for(level)
        if mechanism is MechanismType.LAPLACE:
            return calibrate_laplace(epsilon, sensitivity=self.sensitivity)
        if mechanism is MechanismType.GAUSSIAN:
            return calibrate_gaussian(epsilon, self.delta, sensitivity=self.sensitivity)
        raise ParamValidationError(f"unsupported mechanism '{mechanism}'")

    def __repr__(self) -> str:
        return (
            f"<PrivacyCalibrator levels=[{self.min_level}, {self.max_level}] "
            f"base_epsilon={self.schedule.base_epsilon} decay={self.schedule.decay} delta={self.delta}>"
        )
