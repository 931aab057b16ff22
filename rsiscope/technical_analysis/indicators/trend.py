"""
Trend-following technical indicators.

Moving averages applied to any numeric series; in the RSI chart they smooth
the RSI output itself.

Classes:
    EMA: Exponential Moving Average with SMA seeding
    WMA: Linearly Weighted Moving Average

Functions:
    compute_ema: Batch EMA over a complete series
    compute_wma: Batch WMA over a complete series
"""

import logging
from collections import deque
from typing import Deque, List, Optional

from ..base import BaseIndicator
from ..exceptions import InsufficientDataError
from ..series import Series, SeriesPoint
from .smoothing import EmaSmoothing

logger = logging.getLogger(__name__)


class EMA(BaseIndicator):
    """
    Exponential Moving Average (EMA) indicator.

    Mathematical Formula:
        α = 2 / (period + 1)
        EMA = (value - EMA_prev) * α + EMA_prev

    Initialization Strategy:
        The first ``period`` present values are averaged into the seed, which
        is emitted at the position of the point that completed it. From then
        on every input point produces an output point.

    Absent values:
        Points without a value do not count toward the seed window. After
        seeding they produce an absent output and leave the EMA unchanged.
        With gap-free input the output has ``len(series) - period + 1`` points.

    Example:
        >>> ema = EMA(period=9)
        >>> smoothed = ema.run(rsi_series)
    """

    def __init__(self, period: int = 9):
        """
        Initialize Exponential Moving Average indicator.

        Args:
            period (int): Number of present values in the SMA seed.

        Raises:
            InvalidParameterError: If period is not a positive integer.
        """
        super().__init__(period)
        self._smoother = EmaSmoothing(period)
        self._present_count = 0

    def update(self, point: SeriesPoint) -> Optional[SeriesPoint]:
        self._accept(point)

        if point.value is None:
            if self._smoother.is_seeded:
                return SeriesPoint(point.position, None)
            return None

        self._present_count += 1
        ema_value = self._smoother.update(point.value)
        if ema_value is None:
            return None
        return SeriesPoint(point.position, ema_value)

    def run(self, series: Series) -> List[SeriesPoint]:
        output = super().run(series)
        if not output:
            raise InsufficientDataError(self._present_count, self.period, self._name)
        return output

    @property
    def value(self) -> Optional[float]:
        return self._smoother.value

    @property
    def alpha(self) -> float:
        """Smoothing factor 2 / (period + 1)."""
        return self._smoother.alpha

    def reset(self) -> None:
        super().reset()
        self._smoother.reset()
        self._present_count = 0


class WMA(BaseIndicator):
    """
    Weighted Moving Average (WMA) indicator.

    Each window of ``period`` consecutive points is averaged with linearly
    decreasing weights: the newest point weighs ``period``, the oldest 1.

    Mathematical Formula:
        WMA_i = Σ_{j=0}^{period-1} (period - j) * x_{i-j} / (period * (period + 1) / 2)

    A window that contains any absent value yields an absent output; the gap
    is checked explicitly and never enters the weighted sum.

    Example:
        >>> wma = WMA(period=45)
        >>> smoothed = wma.run(rsi_series)
    """

    def __init__(self, period: int = 45):
        """
        Initialize Weighted Moving Average indicator.

        Args:
            period (int): Window length.

        Raises:
            InvalidParameterError: If period is not a positive integer.
        """
        super().__init__(period)
        self._denominator = period * (period + 1) / 2
        self._window: Deque[Optional[float]] = deque(maxlen=period)
        self._wma_value: Optional[float] = None

    def update(self, point: SeriesPoint) -> Optional[SeriesPoint]:
        self._accept(point)
        self._window.append(point.value)

        if len(self._window) < self.period:
            return None

        if any(value is None for value in self._window):
            self._wma_value = None
        else:
            # Oldest value first, so weights run 1..period
            weighted_sum = 0.0
            for weight, value in enumerate(self._window, start=1):
                weighted_sum += value * weight
            self._wma_value = weighted_sum / self._denominator

        return SeriesPoint(point.position, self._wma_value)

    @property
    def value(self) -> Optional[float]:
        return self._wma_value

    def reset(self) -> None:
        super().reset()
        self._window.clear()
        self._wma_value = None


def compute_ema(series: Series, period: int = 9) -> List[SeriesPoint]:
    """
    Compute an EMA over a complete series.

    Raises:
        InsufficientDataError: Fewer than ``period`` points, or fewer than
            ``period`` present values.
    """
    return EMA(period).run(series)


def compute_wma(series: Series, period: int = 45) -> List[SeriesPoint]:
    """
    Compute a WMA over a complete series.

    Raises:
        InsufficientDataError: Fewer than ``period`` points.
    """
    return WMA(period).run(series)
