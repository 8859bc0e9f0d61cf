"""Entry point for the central differential privacy components: counts, calibration, noise."""

from __future__ import annotations

from .analytics import HistogramBuilder
from .mechanisms import MechanismType, perturb, sample
from .sensitivity import NoiseLevelSchedule, PrivacyCalibrator, calibrate_gaussian, calibrate_laplace

__all__: list[str] = [
    "HistogramBuilder",
    "MechanismType",
    "perturb",
    "sample",
    "NoiseLevelSchedule",
    "PrivacyCalibrator",
    "calibrate_gaussian",
    "calibrate_laplace",
]
