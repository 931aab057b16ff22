"""
Smoothing strategy classes for technical indicators.

This module implements the Strategy pattern for the recursive averages used
by the indicators. Both strategies are seeded with the simple average of the
first ``period`` values and only then switch to their recurrence.

Classes:
    SmoothingStrategy: Abstract base class for seeded smoothing algorithms
    WildersSmoothing: Wilder's running average, (prev * (N-1) + x) / N
    EmaSmoothing: Exponential moving average, (x - prev) * 2/(N+1) + prev
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class SmoothingStrategy(ABC):
    """
    Abstract base class for SMA-seeded recursive smoothing.

    ``update`` returns None until ``period`` values have been seen; the
    period-th value yields the seed (their simple average) and every later
    value applies ``step``.
    """

    def __init__(self, period: int):
        """
        Initialize the smoothing strategy.

        Args:
            period (int): The smoothing period for the algorithm.
        """
        self.period = period
        self._seed_values: List[float] = []
        self._current_value: Optional[float] = None

    @abstractmethod
    def step(self, previous: float, new_value: float) -> float:
        """
        Apply one recurrence step.

        Args:
            previous (float): The smoothed value before this update.
            new_value (float): The incoming value.

        Returns:
            float: The new smoothed value.
        """

    def update(self, new_value: float) -> Optional[float]:
        """
        Update the smoothed value with a new data point.

        Args:
            new_value (float): New value to incorporate into smoothed result.

        Returns:
            Optional[float]: The updated smoothed value, or None while seeding.
        """
        if self._current_value is None:
            self._seed_values.append(new_value)
            if len(self._seed_values) < self.period:
                return None
            self._current_value = sum(self._seed_values) / self.period
            self._seed_values = []
        else:
            self._current_value = self.step(self._current_value, new_value)

        return self._current_value

    @property
    def value(self) -> Optional[float]:
        """Current smoothed value, or None while seeding."""
        return self._current_value

    @property
    def is_seeded(self) -> bool:
        return self._current_value is not None

    def reset(self) -> None:
        """Reset the smoothing strategy to initial state."""
        self._seed_values = []
        self._current_value = None


class WildersSmoothing(SmoothingStrategy):
    """
    Wilder's smoothing as used by RSI, ATR and ADX.

    Mathematical Formula:
        smoothed = (previous * (period - 1) + new_value) / period
    """

    def step(self, previous: float, new_value: float) -> float:
        return (previous * (self.period - 1) + new_value) / self.period


class EmaSmoothing(SmoothingStrategy):
    """
    Standard exponential moving average smoothing.

    Mathematical Formula:
        α = 2 / (period + 1)
        smoothed = (new_value - previous) * α + previous
    """

    def __init__(self, period: int):
        super().__init__(period)
        self.alpha = 2.0 / (period + 1)

    def step(self, previous: float, new_value: float) -> float:
        return (new_value - previous) * self.alpha + previous
