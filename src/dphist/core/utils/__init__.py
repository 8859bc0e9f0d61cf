"""Shared utility helpers used across the core library."""

from .random import (
    create_rng,
    reseed_rng,
    open_uniform,
    half_open_unit,
)
from .config import (
    RuntimeConfig,
    get_config,
    configure,
)
from .logging import (
    get_logger,
    configure_logging,
    PrivacyFilter,
)
from .param_validation import (
    ensure,
    ensure_type,
    ParamValidationError,
)

__all__ = [
    "create_rng",
    "reseed_rng",
    "open_uniform",
    "half_open_unit",
    "RuntimeConfig",
    "get_config",
    "configure",
    "get_logger",
    "configure_logging",
    "PrivacyFilter",
    "ensure",
    "ensure_type",
    "ParamValidationError",
]
