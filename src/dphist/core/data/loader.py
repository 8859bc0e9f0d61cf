"""
CSV dataset loader.

Reads a header-first CSV file into an immutable :class:`Dataset` and checks
that the columns the session aggregates over are present. Every failure is
reported as :class:`LoadError`; the caller treats it as fatal.
"""
# 说明：CSV 数据集加载器。
# 职责：
# - 读取带表头的 CSV 文件并构造只读 Dataset
# - 校验必需字段列（默认 educ / income）存在，且每行对应值非空
# - 文件缺失、无法读取、格式错误或模式校验失败时统一抛出 LoadError

from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, List, Sequence, Union

from dphist.core.utils.logging import get_logger

from .dataset import Dataset, DatasetMetadata, LoadError

DEFAULT_REQUIRED_FIELDS = ("educ", "income")

logger = get_logger(__name__)


def load_csv(
    path: Union[str, Path],
    *,
    required_fields: Sequence[str] = DEFAULT_REQUIRED_FIELDS,
    delimiter: str = ",",
) -> Dataset:
    """Load `path` into a Dataset, validating the required field columns."""
    csv_path = Path(path)
    if not csv_path.is_file():
        raise LoadError(f"dataset file not found: {csv_path}")

    try:
        with csv_path.open("r", encoding="utf-8", newline="") as handle:
            reader = csv.DictReader(handle, delimiter=delimiter)
            header = [name.strip() for name in (reader.fieldnames or [])]
            missing = [name for name in required_fields if name not in header]
            if missing:
                raise LoadError(f"{csv_path}: missing required column(s) {missing}")
            records = [_clean_row(row, header) for row in reader]
    except (OSError, UnicodeDecodeError, csv.Error) as exc:
        raise LoadError(f"could not read dataset {csv_path}: {exc}") from exc

    for line_no, record in enumerate(records, start=2):
        for name in required_fields:
            if record.get(name) in (None, ""):
                raise LoadError(f"{csv_path}:{line_no}: missing value for required column '{name}'")

    metadata = DatasetMetadata(name=csv_path.stem, source=str(csv_path))
    dataset = Dataset.from_records(records, columns=header, metadata=metadata)
    logger.info("loaded dataset %s with %d records", csv_path, len(dataset))
    if len(dataset) == 0:
        logger.warning("dataset %s has no records", csv_path)
    return dataset


def _clean_row(row: Dict[str, str], header: List[str]) -> Dict[str, str]:
    # DictReader 对短行填 None、对多余列使用 None 键；这里只保留表头字段并去除空白
    cleaned: Dict[str, str] = {}
    for raw_key, value in row.items():
        if raw_key is None:
            continue
        key = raw_key.strip()
        if key in header:
            cleaned[key] = value.strip() if isinstance(value, str) else value
    return cleaned
