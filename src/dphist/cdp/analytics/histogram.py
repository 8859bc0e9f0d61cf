"""
Exact categorical histogram over one dataset field.

Responsibilities
  - Count every distinct value observed for a field in one pass.
  - Keep buckets in first-seen order so downstream noise is reproducible.

Limitations
  - Zero-count buckets are omitted; the category set is whatever the data holds.
  - Labels are compared after ``str()``: ``1`` and ``"1"`` share a bucket, and a
    literal value equal to ``missing_label`` shares the missing bucket.
"""
# 说明：对单个数据集字段计算精确的类别直方图（加噪前的真实计数）。
# 职责：
# - 一次遍历统计字段每个取值的出现次数，零计数类别不出现
# - 按首次出现顺序保存类别，保证后续逐桶加噪的顺序稳定
# - 缺失值（None / 空串）计入 missing_label 桶，使计数总和等于数据集大小

from __future__ import annotations

from typing import Any, Dict

from dphist.core.data.dataset import Dataset, UnknownFieldError

MISSING_LABEL = "<missing>"


class HistogramBuilder:
    """
    Build exact category -> count mappings from a dataset.

    Values are stringified; ``None`` and ``""`` map to ``missing_label``. Pass a
    ``missing_label`` that cannot occur in the field to keep missing values
    apart from real categories.
    """

    def __init__(self, *, missing_label: str = MISSING_LABEL):
        self.missing_label = missing_label

    def build(self, dataset: Dataset, field: str) -> Dict[str, int]:
        """Return the exact histogram of `field`; raises UnknownFieldError for unknown fields."""
        if not dataset.has_field(field):
            raise UnknownFieldError(f"field '{field}' is not part of the dataset schema {list(dataset.columns)}")
        counts: Dict[str, int] = {}
        for value in dataset.values(field):
            label = self._label(value)
            counts[label] = counts.get(label, 0) + 1
        return counts

    def _label(self, value: Any) -> str:
        if value is None:
            return self.missing_label
        label = str(value)
        return label if label != "" else self.missing_label
