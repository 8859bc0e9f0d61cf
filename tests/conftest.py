"""Shared pytest configuration, path setup and session fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure repo root and src/ are on sys.path for all tests
_ROOT = Path(__file__).resolve().parents[1]
_SRC = _ROOT / "src"
for p in (str(_ROOT), str(_SRC)):
    if p not in sys.path:
        sys.path.insert(0, p)

from dphist.cdp.sensitivity.noise_calibrator import NoiseLevelSchedule, PrivacyCalibrator  # noqa: E402
from dphist.core.data.dataset import Dataset  # noqa: E402
from dphist.core.utils.config import get_config  # noqa: E402
from dphist.session.state import Field  # noqa: E402

# 测试数据集中使用的列名（与默认的 educ / income 区分开，显式传入 columns）
TEST_COLUMNS = {Field.EDUCATION: "education", Field.INCOME: "income"}


@pytest.fixture(autouse=True)
def _restore_global_config():
    # 每个测试结束后恢复全局配置单例，避免测试间相互污染
    config = get_config()
    saved = dict(vars(config))
    yield
    for key, value in saved.items():
        setattr(config, key, value)


@pytest.fixture
def small_dataset() -> Dataset:
    """Fifteen records: education {A: 10, B: 5}, income {low: 9, high: 6}."""
    records = [{"education": "A", "income": "low" if i < 6 else "high"} for i in range(10)]
    records += [{"education": "B", "income": "low"} for _ in range(3)]
    records += [{"education": "B", "income": "high"} for _ in range(2)]
    return Dataset.from_records(records)


@pytest.fixture
def calibrator() -> PrivacyCalibrator:
    return PrivacyCalibrator(NoiseLevelSchedule(base_epsilon=10.0, decay=2.0, min_level=0, max_level=10))


@pytest.fixture
def columns():
    return dict(TEST_COLUMNS)
