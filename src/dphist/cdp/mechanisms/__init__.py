"""Noise mechanisms used to perturb histogram counts."""

from .noise import (
    MechanismType,
    perturb,
    sample,
    sample_gaussian,
    sample_laplace,
)

__all__ = [
    "MechanismType",
    "perturb",
    "sample",
    "sample_gaussian",
    "sample_laplace",
]
