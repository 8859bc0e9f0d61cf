"""
Random number generation helpers.

Responsibilities
  - Centralize RNG creation and seeding for the noise session.
  - Provide the uniform draws the noise samplers are built on.

Usage Context
  - The session creates one generator at startup and passes it by
    reference into every sampling call.
  - Reseeding replaces the generator state in place so every holder of the
    reference observes the new stream.

Limitations
  - Relies on numpy Generator behavior for reproducibility.
"""
# 说明：随机数生成辅助工具，用于统一管理会话级 RNG 的创建与重置。
# 职责：
# - create_rng / reseed_rng：封装 numpy Generator 的创建与原地重置逻辑
# - open_uniform / half_open_unit：为拉普拉斯 / 高斯采样提供端点受控的均匀分布抽样
# 约定：
# - 整个会话只持有一个 Generator，不允许在单次采样时重新播种

from __future__ import annotations

from typing import Optional, Union

import numpy as np

SeedLike = Union[None, int, np.random.SeedSequence, np.random.Generator]


def create_rng(seed: SeedLike = None) -> np.random.Generator:
    """Create a numpy Generator from a seed, SeedSequence, or existing generator."""
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def reseed_rng(rng: np.random.Generator, seed: Optional[int]) -> np.random.Generator:
    """Replace RNG state with a new seed; returns the generator for chaining."""
    # 保持对象标识与底层 BitGenerator 类型不变，只替换内部状态
    rng.bit_generator.state = type(rng.bit_generator)(seed).state
    return rng


def open_uniform(rng: np.random.Generator, low: float, high: float) -> float:
    """Draw from the open interval (low, high)."""
    # Generator.uniform 为左闭右开区间，遇到左端点时重抽
    while True:
        value = float(rng.uniform(low, high))
        if value != low:
            return value


def half_open_unit(rng: np.random.Generator) -> float:
    """Draw from (0, 1]."""
    return 1.0 - float(rng.random())
