"""
Unit tests for the exact categorical histogram builder.
"""
# 说明：HistogramBuilder 的单元测试。
# 覆盖：
# - 计数总和等于数据集大小，零计数类别不出现
# - 类别保持首次出现顺序，结果确定且不修改数据集
# - 缺失值计入 missing 桶；未知字段抛出 UnknownFieldError

import pytest

from dphist.cdp.analytics import MISSING_LABEL, HistogramBuilder
from dphist.core.data import Dataset, UnknownFieldError


def test_build_counts_each_category(small_dataset: Dataset) -> None:
    builder = HistogramBuilder()
    assert builder.build(small_dataset, "education") == {"A": 10, "B": 5}
    assert builder.build(small_dataset, "income") == {"low": 9, "high": 6}


def test_build_sum_equals_dataset_size(small_dataset: Dataset) -> None:
    for field in ("education", "income"):
        assert sum(HistogramBuilder().build(small_dataset, field).values()) == len(small_dataset)


def test_build_keeps_first_seen_order_and_omits_zero_buckets() -> None:
    ds = Dataset.from_records([{"f": v} for v in ["c", "a", "c", "b", "a"]], columns=["f", "g"])
    histogram = HistogramBuilder().build(ds, "f")
    assert list(histogram) == ["c", "a", "b"]
    assert all(count > 0 for count in histogram.values())


def test_build_is_deterministic(small_dataset: Dataset) -> None:
    builder = HistogramBuilder()
    first = builder.build(small_dataset, "education")
    second = builder.build(small_dataset, "education")
    assert first == second and list(first) == list(second)


def test_build_counts_missing_values() -> None:
    # None 与空串计入缺失桶，以保持计数总和不变
    ds = Dataset.from_records([{"f": "x"}, {"f": None}, {"f": ""}, {}], columns=["f"])
    histogram = HistogramBuilder().build(ds, "f")
    assert histogram == {"x": 1, MISSING_LABEL: 3}
    custom = HistogramBuilder(missing_label="NA").build(ds, "f")
    assert custom["NA"] == 3


def test_build_stringifies_values() -> None:
    ds = Dataset.from_arrays({"educ": [12, 12, 9]})
    assert HistogramBuilder().build(ds, "educ") == {"12": 2, "9": 1}


def test_build_empty_dataset() -> None:
    ds = Dataset([], columns=["educ"])
    assert HistogramBuilder().build(ds, "educ") == {}


def test_build_unknown_field_raises(small_dataset: Dataset) -> None:
    with pytest.raises(UnknownFieldError):
        HistogramBuilder().build(small_dataset, "age")


def test_labels_are_compared_as_strings() -> None:
    # 取值先转为字符串：1 与 "1" 同桶；与 missing_label 相同的字面值并入缺失桶
    ds = Dataset.from_records([{"f": 1}, {"f": "1"}, {"f": MISSING_LABEL}, {"f": None}], columns=["f"])
    assert HistogramBuilder().build(ds, "f") == {"1": 2, MISSING_LABEL: 2}
    # 选用数据中不会出现的标签即可区分缺失值与真实类别
    separated = HistogramBuilder(missing_label="<none>").build(ds, "f")
    assert separated == {"1": 2, MISSING_LABEL: 1, "<none>": 1}
