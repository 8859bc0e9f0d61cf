"""Core data abstractions: the dataset container and its CSV loader."""

from .dataset import (
    Dataset,
    DatasetError,
    DatasetMetadata,
    DataRecord,
    LoadError,
    UnknownFieldError,
)
from .loader import (
    DEFAULT_REQUIRED_FIELDS,
    load_csv,
)

__all__ = [
    "Dataset",
    "DatasetError",
    "DatasetMetadata",
    "DataRecord",
    "LoadError",
    "UnknownFieldError",
    "DEFAULT_REQUIRED_FIELDS",
    "load_csv",
]
