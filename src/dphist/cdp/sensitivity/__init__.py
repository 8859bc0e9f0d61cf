"""Noise calibration for count queries."""

from .noise_calibrator import (
    COUNT_SENSITIVITY,
    DEFAULT_DELTA,
    NoiseLevelSchedule,
    PrivacyCalibrator,
    calibrate_gaussian,
    calibrate_laplace,
)

__all__ = [
    "COUNT_SENSITIVITY",
    "DEFAULT_DELTA",
    "NoiseLevelSchedule",
    "PrivacyCalibrator",
    "calibrate_gaussian",
    "calibrate_laplace",
]
