"""dphist: watch differential-privacy noise distort a categorical histogram."""

from __future__ import annotations

from .cdp import HistogramBuilder, MechanismType, NoiseLevelSchedule, PrivacyCalibrator
from .core import Dataset, LoadError, load_csv
from .session import Action, Field, NoiseController, NoiseState, Snapshot, transition

__version__ = "0.1.0"

__all__: list[str] = [
    "HistogramBuilder",
    "MechanismType",
    "NoiseLevelSchedule",
    "PrivacyCalibrator",
    "Dataset",
    "LoadError",
    "load_csv",
    "Action",
    "Field",
    "NoiseController",
    "NoiseState",
    "Snapshot",
    "transition",
]
