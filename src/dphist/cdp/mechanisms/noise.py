"""
Additive noise mechanisms for count queries.

Responsibilities:
    * name the supported mechanisms as a closed enumeration
    * sample one Laplace or Gaussian perturbation from uniform draws
    * perturb a whole histogram in its iteration order

Both samplers are total for a positive scale and draw only from the
generator they are given; callers own the generator and never reseed it
between buckets.
"""
# 说明：计数查询的加性噪声机制（拉普拉斯 / 高斯）。
# 职责：
# - MechanismType：封闭的机制枚举，提供名称解析与两种机制间的切换
# - sample_laplace：逆变换采样，u ~ U(-0.5, 0.5)，返回 -b·sign(u)·ln(1-2|u|)
# - sample_gaussian：Box–Muller 变换，u1, u2 ~ U(0, 1]，返回 σ·z
# - sample / perturb：通过唯一的分派表按机制采样，并按直方图顺序逐桶加噪
# 约定：
# - 所有采样共用调用方传入的同一个 Generator，采样顺序决定输出

from __future__ import annotations

import enum
import math
from typing import Callable, Dict, Mapping

import numpy as np

from dphist.core.utils.param_validation import ParamValidationError, ensure
from dphist.core.utils.random import half_open_unit, open_uniform


class MechanismType(enum.Enum):
    """Supported noise mechanisms."""

    LAPLACE = "laplace"
    GAUSSIAN = "gaussian"

    @classmethod
    def from_str(cls, name: str) -> "MechanismType":
        # 大小写不敏感；接受 normal 作为 gaussian 的别名
        normalized = name.strip().lower()
        if normalized == "normal":
            normalized = "gaussian"
        try:
            return cls(normalized)
        except ValueError as exc:
            raise ParamValidationError(f"unknown mechanism '{name}'") from exc

    def toggle(self) -> "MechanismType":
        return MechanismType.GAUSSIAN if self is MechanismType.LAPLACE else MechanismType.LAPLACE

    @property
    def label(self) -> str:
        return self.value.capitalize()

    def sample(self, scale: float, rng: np.random.Generator) -> float:
        return sample(self, scale, rng)


def sample_laplace(scale: float, rng: np.random.Generator) -> float:
    """Draw Laplace(0, scale) noise by inverse-CDF transform. Variance is 2*scale**2."""
    u = open_uniform(rng, -0.5, 0.5)
    # u 取开区间，ln 的参数恒为正
    return -scale * math.copysign(1.0, u) * math.log(1.0 - 2.0 * abs(u))


def sample_gaussian(scale: float, rng: np.random.Generator) -> float:
    """Draw Normal(0, scale**2) noise with the Box-Muller transform."""
    u1 = half_open_unit(rng)
    u2 = half_open_unit(rng)
    z = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
    return scale * z


_SAMPLERS: Dict[MechanismType, Callable[[float, np.random.Generator], float]] = {
    MechanismType.LAPLACE: sample_laplace,
    MechanismType.GAUSSIAN: sample_gaussian,
}


def sample(mechanism: MechanismType, scale: float, rng: np.random.Generator) -> float:
    """Draw one perturbation for `mechanism` at `scale` from `rng`."""
    ensure(scale > 0 and math.isfinite(scale), "scale must be a positive finite number")
    try:
        sampler = _SAMPLERS[mechanism]
    except KeyError as exc:
        raise ParamValidationError(f"unsupported mechanism '{mechanism}'") from exc
    return sampler(float(scale), rng)


def perturb(
    mechanism: MechanismType,
    counts: Mapping[str, int],
    scale: float,
    rng: np.random.Generator,
) -> Dict[str, float]:
    """Return `counts` with one independent perturbation added per bucket.

    Buckets are visited in the mapping's iteration order, so a fixed seed
    reproduces the same noisy histogram.
    """
    # 逐桶顺序采样；不可并行，采样顺序影响结果
    return {label: float(count) + sample(mechanism, scale, rng) for label, count in counts.items()}
