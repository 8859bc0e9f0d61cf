"""Aggregations released through the noise session."""

from .histogram import MISSING_LABEL, HistogramBuilder

__all__ = ["MISSING_LABEL", "HistogramBuilder"]
