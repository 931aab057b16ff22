"""
Momentum technical indicators.

This module implements indicators that measure the speed and strength of price movements.

Classes:
    RSI: Relative Strength Index with Wilder's smoothing

Functions:
    compute_rsi: Batch RSI over a complete series
"""

import math
import logging
from typing import List, Literal, Optional

from ..base import BaseIndicator
from ..exceptions import DegenerateComputationError, InvalidDataError, InvalidParameterError
from ..series import Series, SeriesPoint
from .smoothing import WildersSmoothing

logger = logging.getLogger(__name__)

DEGENERATE_POLICIES = ('clamp', 'raise')


class RSI(BaseIndicator):
    """
    Relative Strength Index (RSI) momentum indicator.

    Measures the speed and change of price movements to identify
    overbought/oversold conditions.

    Mathematical Formula:
        RSI = 100 - (100 / (1 + RS))
        where RS = Average Gain / Average Loss

        diff >= 0 counts as a gain of diff (a zero move is a zero gain)
        diff <  0 counts as a loss of |diff|

    Averages are seeded with the simple mean over the first ``period``
    transitions and then follow Wilder's recurrence
    ``avg = (avg * (period - 1) + x) / period``. The first output therefore
    sits at input index ``period`` and a series of ``n`` points yields
    ``n - period`` outputs.

    Degenerate case:
        When the average loss is exactly zero the ratio is undefined.
        ``degenerate_policy='clamp'`` reports RSI = 100 (also for a flat
        series); ``degenerate_policy='raise'`` raises
        DegenerateComputationError.

    Example:
        >>> rsi = RSI(period=14)
        >>> for point in closes:
        ...     out = rsi.update(point)
        ...     if out is not None and out.value > 70:
        ...         print(f"Overbought at {out.position}: RSI = {out.value:.1f}")
    """

    allows_absent = False

    def __init__(self, period: int = 14, degenerate_policy: Literal['clamp', 'raise'] = 'clamp'):
        """
        Initialize Relative Strength Index indicator.

        Args:
            period (int): Number of transitions in the seed window. Standard is 14.
            degenerate_policy (str): 'clamp' or 'raise', see class docstring.

        Raises:
            InvalidParameterError: If period is not positive or the policy is unknown.
        """
        super().__init__(period)

        if degenerate_policy not in DEGENERATE_POLICIES:
            raise InvalidParameterError(
                "degenerate_policy",
                degenerate_policy,
                f"one of {list(DEGENERATE_POLICIES)}",
                "RSI",
            )
        self.degenerate_policy = degenerate_policy

        # One extra point for the first gain/loss
        self._ready_threshold = period + 1

        self._gain_smoother = WildersSmoothing(period)
        self._loss_smoother = WildersSmoothing(period)

        self._previous_value: Optional[float] = None
        self._rsi_value: Optional[float] = None

    def update(self, point: SeriesPoint) -> Optional[SeriesPoint]:
        """
        Process the next price and return the RSI point once seeded.

        Raises:
            MalformedSeriesError: If the position does not follow the previous one.
            InvalidDataError: If the point carries no value.
            DegenerateComputationError: If the average loss is zero under 'raise'.
        """
        if point.value is None:
            # run() rejects this up front
            raise InvalidDataError("value", None, f"absent value at position {point.position}", self._name)

        self._accept(point)
        current = point.value

        if self._previous_value is None:
            self._previous_value = current
            return None

        diff = current - self._previous_value
        self._previous_value = current

        if diff >= 0:
            gain, loss = diff, 0.0
        else:
            gain, loss = 0.0, -diff

        avg_gain = self._gain_smoother.update(gain)
        avg_loss = self._loss_smoother.update(loss)
        if avg_gain is None or avg_loss is None:
            return None

        self._rsi_value = self._relative_strength_index(avg_gain, avg_loss, point.position)
        return SeriesPoint(point.position, self._rsi_value)

    def _relative_strength_index(self, avg_gain: float, avg_loss: float, position: int) -> float:
        if avg_loss == 0:
            if self.degenerate_policy == 'raise':
                raise DegenerateComputationError(position, self._name)
            logger.debug(f"{self._name}: zero average loss at position {position}, clamping to 100")
            return 100.0

        rs = avg_gain / avg_loss
        return 100.0 - (100.0 / (1.0 + rs))

    @property
    def value(self) -> Optional[float]:
        """Current RSI value between 0-100, or None during warm-up."""
        return self._rsi_value

    @property
    def average_gain(self) -> float:
        """Current smoothed average gain, or NaN if not seeded."""
        if self._gain_smoother.value is None:
            return math.nan
        return self._gain_smoother.value

    @property
    def average_loss(self) -> float:
        """Current smoothed average loss, or NaN if not seeded."""
        if self._loss_smoother.value is None:
            return math.nan
        return self._loss_smoother.value

    @property
    def relative_strength(self) -> float:
        """
        Current RS = average_gain / average_loss.

        Returns NaN before seeding and infinity when the average loss is zero.
        """
        avg_gain = self.average_gain
        avg_loss = self.average_loss

        if math.isnan(avg_gain) or math.isnan(avg_loss):
            return math.nan

        if avg_loss == 0:
            return math.inf

        return avg_gain / avg_loss

    def reset(self) -> None:
        """Reset the indicator, including both smoothers."""
        super().reset()
        self._previous_value = None
        self._rsi_value = None
        self._gain_smoother.reset()
        self._loss_smoother.reset()


def compute_rsi(
    series: Series,
    period: int = 14,
    degenerate_policy: Literal['clamp', 'raise'] = 'clamp',
) -> List[SeriesPoint]:
    """
    Compute RSI over a complete series.

    Args:
        series: Raw values, all present, with contiguous positions.
        period: RSI period; requires ``len(series) > period``.
        degenerate_policy: 'clamp' or 'raise' for a zero average loss.

    Returns:
        A new series of ``len(series) - period`` points starting at
        ``series[period].position``.
    """
    return RSI(period, degenerate_policy).run(series)
