"""
Dataset abstraction consumed by the histogram builder.

Responsibilities:
    * wrap mapping-based records loaded once at startup
    * expose column names, length, indexing and ordered iteration
    * stay read-only after construction
"""
# 说明：Dataset 抽象，封装启动时加载一次的记录集合，供直方图构建器只读访问。
# 职责：
# - 将记录字典序列封装为统一、不可变的 Dataset 接口
# - 提供列名、长度、索引与按原始顺序迭代的能力
# - 暴露数据集元信息（名称、来源、描述）

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Sequence, Tuple

DataRecord = Mapping[str, Any]


class DatasetError(RuntimeError):
    """Raised when dataset operations fail."""


class LoadError(DatasetError):
    """Raised when a dataset file is missing, unreadable, or fails schema checks."""


class UnknownFieldError(DatasetError):
    """Raised when a field is not part of the dataset schema."""


@dataclass
class DatasetMetadata:
    """Basic metadata container used by the dataset abstraction."""

    name: str = "Dataset"
    source: Optional[str] = None
    description: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)


class Dataset:
    """Immutable, ordered collection of mapping-based records."""
    # 记录在构造时被复制并包装为只读映射，之后不可修改

    def __init__(
        self,
        records: Iterable[DataRecord],
        *,
        columns: Optional[Sequence[str]] = None,
        metadata: Optional[DatasetMetadata] = None,
    ):
        self._metadata = metadata or DatasetMetadata()
        frozen = []
        for idx, record in enumerate(records):
            if not isinstance(record, Mapping):
                raise DatasetError(f"record {idx} is not a mapping")
            frozen.append(MappingProxyType(dict(record)))
        self._records: Tuple[DataRecord, ...] = tuple(frozen)
        self._columns = tuple(columns) if columns is not None else self._infer_columns()

    def _infer_columns(self) -> Tuple[str, ...]:
        # 未显式给出列名时，取所有记录键的并集（保持首次出现顺序）
        seen: Dict[str, None] = {}
        for record in self._records:
            for key in record:
                seen.setdefault(key, None)
        return tuple(seen)

    @property
    def metadata(self) -> DatasetMetadata:
        return self._metadata

    @property
    def columns(self) -> Tuple[str, ...]:
        return self._columns

    def has_field(self, name: str) -> bool:
        return name in self._columns

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> DataRecord:
        return self._records[index]

    def __iter__(self) -> Iterator[DataRecord]:
        return iter(self._records)

    def values(self, name: str) -> Iterator[Any]:
        """Yield the value of `name` for every record, in dataset order."""
        if not self.has_field(name):
            raise UnknownFieldError(f"field '{name}' is not part of the dataset schema {list(self._columns)}")
        for record in self._records:
            yield record.get(name)

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        *,
        columns: Optional[Sequence[str]] = None,
        metadata: Optional[DatasetMetadata] = None,
    ) -> "Dataset":
        """Create a dataset from a sequence of mapping-based records."""
        return cls(records, columns=columns, metadata=metadata)

    @classmethod
    def from_arrays(
        cls,
        arrays: Mapping[str, Sequence[Any]],
        *,
        metadata: Optional[DatasetMetadata] = None,
    ) -> "Dataset":
        """Create a dataset from columnar arrays."""
        # 由列式数组（列名->序列）构建数据集；要求所有列长度一致
        lengths = {len(values) for values in arrays.values()}
        if len(lengths) > 1:
            raise DatasetError("all columns must have the same length")
        size = lengths.pop() if lengths else 0
        records = [{key: arrays[key][idx] for key in arrays} for idx in range(size)]
        return cls(records, columns=list(arrays), metadata=metadata)

    def __repr__(self) -> str:
        return f"<Dataset name={self._metadata.name} rows={len(self)} columns={list(self._columns)}>"
