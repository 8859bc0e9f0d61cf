"""Entry point for the core library components."""

from __future__ import annotations

from .data import (
    Dataset,
    DatasetError,
    DatasetMetadata,
    LoadError,
    UnknownFieldError,
    load_csv,
)
from .utils import (
    ParamValidationError,
    RuntimeConfig,
    configure,
    create_rng,
    get_config,
    get_logger,
)

__all__: list[str] = [
    "Dataset",
    "DatasetError",
    "DatasetMetadata",
    "LoadError",
    "UnknownFieldError",
    "load_csv",
    "ParamValidationError",
    "RuntimeConfig",
    "configure",
    "create_rng",
    "get_config",
    "get_logger",
]
