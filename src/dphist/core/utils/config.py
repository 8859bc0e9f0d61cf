"""
Runtime configuration utilities.

Centralises the tool's tunable options (noise schedule, Gaussian delta,
dataset location, logging) and exposes helpers to read them from
environment variables or update them at runtime.
"""
# 说明：运行时配置管理工具，集中管理可调选项，并支持环境变量覆写与运行期更新。
# 职责：
# - RuntimeConfig：封装噪声等级调度、高斯 δ、数据集路径、日志等级、随机种子等配置项
# - load_from_env(...)：按统一前缀（DPHIST_）从环境变量加载并解析配置值
# - validate()：对数值配置做一次集中校验
# - get_config() / configure(...)：全局单例的读取与更新入口
# 约定：
# - 布尔类环境变量使用 {"1", "true", "yes"}（大小写不敏感）视为 True
# - 未知配置键在 update(...) 中会触发 AttributeError，避免静默吞错

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from .param_validation import ensure


def _parse_bool(value: str) -> bool:
    return value.lower() in {"1", "true", "yes"}


# 环境变量后缀 -> (属性名, 类型转换函数)
_ENV_FIELDS: Dict[str, Tuple[str, Callable[[str], Any]]] = {
    "LOG_LEVEL": ("log_level", str),
    "MASK_SENSITIVE_FIELDS": ("mask_sensitive_fields", _parse_bool),
    "RNG_SEED": ("rng_seed", int),
    "DATASET_PATH": ("dataset_path", str),
    "BASE_EPSILON": ("base_epsilon", float),
    "EPSILON_DECAY": ("epsilon_decay", float),
    "MIN_LEVEL": ("min_level", int),
    "MAX_LEVEL": ("max_level", int),
    "DELTA": ("delta", float),
    "DEFAULT_MECHANISM": ("default_mechanism", str),
}


@dataclass
class RuntimeConfig:
    log_level: str = field(default_factory=lambda: os.environ.get("DPHIST_LOG_LEVEL", "WARNING"))
    mask_sensitive_fields: bool = True
    rng_seed: Optional[int] = None
    dataset_path: str = "data/data.csv"
    base_epsilon: float = 10.0
    epsilon_decay: float = 2.0
    min_level: int = 0
    max_level: int = 10
    delta: float = 1e-5
    default_mechanism: str = "laplace"
    extra: Dict[str, Any] = field(default_factory=dict)

    def update(self, **kwargs: Any) -> None:
        # 按关键字参数更新当前配置实例，未知字段名将显式报错
        for key, value in kwargs.items():
            if not hasattr(self, key):
                raise AttributeError(f"unknown config option '{key}'")
            setattr(self, key, value)

    def load_from_env(self, prefix: str = "DPHIST_") -> None:
        # 从带有指定前缀的环境变量中加载配置，并进行类型转换后写回实例字段
        for key, (attr, convert) in _ENV_FIELDS.items():
            env_key = f"{prefix}{key}"
            if env_key not in os.environ:
                continue
            setattr(self, attr, convert(os.environ[env_key]))

    def validate(self) -> "RuntimeConfig":
        """Check the numeric options; returns self so calls can be chained."""
        ensure(math.isfinite(self.base_epsilon) and self.base_epsilon > 0, "base_epsilon must be a positive finite number")
        ensure(math.isfinite(self.epsilon_decay) and self.epsilon_decay > 1, "epsilon_decay must be a finite number greater than 1")
        ensure(self.min_level <= self.max_level, "min_level must not exceed max_level")
        ensure(0 < self.delta < 1, "delta must be in (0,1)")
        return self


# 全局配置单例，用作进程内默认的运行时配置
_GLOBAL_CONFIG = RuntimeConfig()


def get_config() -> RuntimeConfig:
    return _GLOBAL_CONFIG


def configure(**kwargs: Any) -> RuntimeConfig:
    # 以关键字参数更新全局配置，并返回更新后的实例
    _GLOBAL_CONFIG.update(**kwargs)
    return _GLOBAL_CONFIG
