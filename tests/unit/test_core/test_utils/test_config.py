"""
Unit tests for runtime configuration utilities.
"""
# 说明：RuntimeConfig（运行时配置）及全局配置访问辅助函数的单元测试。
# 覆盖：
# - configure(...)：通过关键字参数更新全局配置实例字段，未知键报错
# - RuntimeConfig.load_from_env(...)：从 DPHIST_ 前缀环境变量加载并转换类型
# - validate()：噪声调度与 δ 的取值约束
# - get_config()：返回全局 RuntimeConfig 单例

import pytest

from dphist.core.utils import ParamValidationError, RuntimeConfig, configure, get_config


def test_configure_updates_values() -> None:
    # 验证 configure(...) 能正确更新全局配置的字段值
    cfg = configure(max_level=6, delta=1e-6)
    assert cfg.max_level == 6
    assert cfg.delta == 1e-6
    assert get_config() is cfg


def test_configure_rejects_unknown_option() -> None:
    # 未知配置键应显式报错而不是静默忽略
    with pytest.raises(AttributeError):
        configure(not_an_option=True)


def test_runtime_config_env_override(monkeypatch) -> None:
    # 验证 load_from_env(...) 按环境变量覆写默认配置，并完成类型转换
    cfg = RuntimeConfig()
    monkeypatch.setenv("DPHIST_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("DPHIST_MAX_LEVEL", "6")
    monkeypatch.setenv("DPHIST_RNG_SEED", "3")
    monkeypatch.setenv("DPHIST_BASE_EPSILON", "4.5")
    monkeypatch.setenv("DPHIST_MASK_SENSITIVE_FIELDS", "no")
    monkeypatch.setenv("DPHIST_DATASET_PATH", "other.csv")
    cfg.load_from_env()
    assert cfg.log_level == "DEBUG"
    assert cfg.max_level == 6
    assert cfg.rng_seed == 3
    assert cfg.base_epsilon == pytest.approx(4.5)
    assert cfg.mask_sensitive_fields is False
    assert cfg.dataset_path == "other.csv"


def test_runtime_config_env_untouched_when_unset(monkeypatch) -> None:
    # 未设置的环境变量不改变当前配置
    monkeypatch.delenv("DPHIST_MAX_LEVEL", raising=False)
    cfg = RuntimeConfig(max_level=4)
    cfg.load_from_env()
    assert cfg.max_level == 4


@pytest.mark.parametrize(
    "overrides",
    [
        {"base_epsilon": 0.0},
        {"epsilon_decay": 1.0},
        {"min_level": 5, "max_level": 4},
        {"delta": 0.0},
        {"delta": 1.0},
        {"base_epsilon": float("inf")},
        {"epsilon_decay": float("nan")},
    ],
)
def test_runtime_config_validate_rejects_bad_values(overrides) -> None:
    # 非法的噪声调度或 δ 应触发 ParamValidationError
    cfg = RuntimeConfig(**overrides)
    with pytest.raises(ParamValidationError):
        cfg.validate()


def test_runtime_config_validate_returns_self() -> None:
    cfg = RuntimeConfig()
    assert cfg.validate() is cfg
