"""Base class for technical indicators."""

from abc import ABC, abstractmethod
from typing import Any, List, Optional
import logging

from .exceptions import InsufficientDataError, InvalidParameterError, MalformedSeriesError
from .series import Series, SeriesPoint, validate_series, validate_value

logger = logging.getLogger(__name__)


def validate_period(period: Any, name: str = "period") -> int:
    """
    Validate that a period parameter is a positive integer.

    Raises:
        InvalidParameterError: If period is not a positive integer.
    """
    if isinstance(period, bool) or not isinstance(period, int):
        raise InvalidParameterError(name, period, "positive integer")

    if period <= 0:
        raise InvalidParameterError(name, period, "positive integer (> 0)")

    return period


class BaseIndicator(ABC):
    """
    Abstract base for streaming technical indicators.

    Every indicator is a fold over an ordered series: ``update`` consumes
    one point and returns the output point for that position, or ``None``
    while the indicator is still warming up. ``run`` applies that fold to a
    whole series and returns a brand-new output series; the input is never
    mutated.

    Instances hold only per-run state. The module-level ``compute_*``
    helpers build a fresh instance per call, so concurrent callers never
    share anything.
    """

    # Whether input points may carry an absent value
    allows_absent: bool = True

    def __init__(self, period: int):
        """Initialize indicator with its lookback period."""
        validate_period(period)

        self.period = period

        # Minimum number of input points before the first output
        self._ready_threshold = period
        self._data_count = 0
        self._last_position: Optional[int] = None

        self._name = self.__class__.__name__

        logger.debug(f"Initialized {self._name} with period={period}")

    @abstractmethod
    def update(self, point: SeriesPoint) -> Optional[SeriesPoint]:
        """
        Process the next point in position order.

        Implementations must call ``_accept`` first so positional
        contiguity is enforced for streamed input as well.

        Returns:
            The output point at ``point.position``, or None during warm-up.
        """

    @property
    @abstractmethod
    def value(self) -> Optional[float]:
        """Most recent output value, None while warming up."""

    @property
    def is_ready(self) -> bool:
        return self._data_count >= self._ready_threshold

    @property
    def required_points(self) -> int:
        """Input length needed to emit at least one output point."""
        return self._ready_threshold

    def run(self, series: Series) -> List[SeriesPoint]:
        """
        Fold the indicator over a complete series.

        The series is validated before any computation and the indicator is
        reset first, so the result depends only on ``series``.

        Raises:
            MalformedSeriesError: Positions are not contiguous.
            InvalidDataError: Values are NaN/inf, or absent where not allowed.
            InsufficientDataError: The series is shorter than the warm-up.
        """
        validate_series(series, allow_absent=self.allows_absent, indicator_name=self._name)
        if len(series) < self.required_points:
            raise InsufficientDataError(len(series), self.required_points, self._name)

        self.reset()
        output: List[SeriesPoint] = []
        for point in series:
            result = self.update(point)
            if result is not None:
                output.append(result)

        logger.debug(f"{self._name} produced {len(output)} points from {len(series)} inputs")
        return output

    def reset(self) -> None:
        """Return the indicator to its post-construction state."""
        self._data_count = 0
        self._last_position = None

    def _accept(self, point: SeriesPoint) -> None:
        """Record a streamed point, enforcing contiguous positions and finite values."""
        if self._last_position is not None and point.position != self._last_position + 1:
            raise MalformedSeriesError(
                self._data_count,
                f"expected position {self._last_position + 1}, got {point.position}",
                self._name,
            )
        validate_value(point.value, point.position, self._name)
        self._last_position = point.position
        self._data_count += 1

    def __repr__(self) -> str:
        ready_status = "ready" if self.is_ready else f"warming up ({self._data_count}/{self._ready_threshold})"
        return f"{self._name}(period={self.period}, {ready_status})"

    def __str__(self) -> str:
        return self.__repr__()
