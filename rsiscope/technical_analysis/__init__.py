"""
rsiscope Technical Analysis Library

RSI with EMA and WMA overlays, computed as pure folds over position-indexed
series and aligned into plot-ready congruent series.

This library provides:
- SeriesPoint/Series value types with explicit absent values
- Streaming indicators (one point at a time) with batch helpers
- An alignment stage reconciling differing warm-up periods

Example Usage:
    import rsiscope.technical_analysis as ta

    closes = ta.make_series([100.0, 102.0, 101.0, ...])
    aligned = ta.run_pipeline(closes, ta.IndicatorParameters(rsi_period=14))

    rsi = ta.compute_rsi(closes, period=14)
    wma = ta.compute_wma(rsi, period=45)
"""

__version__ = "1.0.0"

from .base import BaseIndicator, validate_period
from .exceptions import (
    IndicatorError,
    InvalidParameterError,
    InsufficientDataError,
    InvalidDataError,
    MalformedSeriesError,
    DegenerateComputationError,
)
from .series import (
    SeriesPoint,
    Series,
    make_series,
    validate_series,
    first_present_index,
)
from .indicators import (
    RSI, EMA, WMA,
    compute_rsi, compute_ema, compute_wma,
    SmoothingStrategy, WildersSmoothing, EmaSmoothing,
)
from .alignment import AlignedSeries, align_series, pad_start_to_match, extend_with_padding
from .pipeline import IndicatorParameters, run_pipeline

__all__ = [
    # Series model
    "SeriesPoint",
    "Series",
    "make_series",
    "validate_series",
    "first_present_index",

    # Core classes
    "BaseIndicator",
    "RSI",
    "EMA",
    "WMA",
    "SmoothingStrategy",
    "WildersSmoothing",
    "EmaSmoothing",

    # Batch computation
    "compute_rsi",
    "compute_ema",
    "compute_wma",

    # Alignment
    "AlignedSeries",
    "align_series",
    "pad_start_to_match",
    "extend_with_padding",

    # Pipeline
    "IndicatorParameters",
    "run_pipeline",

    # Parameter validation
    "validate_period",

    # Exceptions
    "IndicatorError",
    "InvalidParameterError",
    "InsufficientDataError",
    "InvalidDataError",
    "MalformedSeriesError",
    "DegenerateComputationError",

    "__version__",
]
