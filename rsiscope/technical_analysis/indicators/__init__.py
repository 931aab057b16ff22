"""
Technical Analysis Indicators Module

Concrete streaming indicators built on BaseIndicator, plus batch helpers
that fold them over a complete series.
"""

from .smoothing import SmoothingStrategy, WildersSmoothing, EmaSmoothing
from .trend import EMA, WMA, compute_ema, compute_wma
from .momentum import RSI, compute_rsi

__all__ = [
    # Trend indicators
    "EMA",
    "WMA",
    "compute_ema",
    "compute_wma",

    # Momentum indicators
    "RSI",
    "compute_rsi",

    # Smoothing strategies
    "SmoothingStrategy",
    "WildersSmoothing",
    "EmaSmoothing",
]
