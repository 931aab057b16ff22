"""
Series value types shared by every stage of the indicator pipeline.

A series is an ordered sequence of ``SeriesPoint`` whose positions are
contiguous integers (``series[i].position == series[0].position + i``).
A point whose ``value`` is ``None`` carries no computed value at that
position (warm-up gap or display padding); it is never coerced to zero.
"""

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .exceptions import InvalidDataError, MalformedSeriesError


@dataclass(frozen=True)
class SeriesPoint:
    """A single ``(position, value)`` observation."""

    position: int
    value: Optional[float] = None

    @property
    def is_present(self) -> bool:
        return self.value is not None


Series = Sequence[SeriesPoint]


def make_series(values: Iterable[Optional[float]], start: int = 0) -> List[SeriesPoint]:
    """
    Build a series from plain values, numbering positions from ``start``.

    Example:
        >>> make_series([100.0, 101.5, None], start=3)
        [SeriesPoint(position=3, value=100.0), SeriesPoint(position=4, value=101.5),
         SeriesPoint(position=5, value=None)]
    """
    return [
        SeriesPoint(start + offset, None if value is None else float(value))
        for offset, value in enumerate(values)
    ]


def absent_points(positions: Iterable[int]) -> List[SeriesPoint]:
    """Absent-valued points at the given positions."""
    return [SeriesPoint(position, None) for position in positions]


def positions(series: Series) -> List[int]:
    return [point.position for point in series]


def values(series: Series) -> List[Optional[float]]:
    return [point.value for point in series]


def first_present_index(series: Series) -> int:
    """Index of the first point carrying a value, or -1 if there is none."""
    for index, point in enumerate(series):
        if point.value is not None:
            return index
    return -1


def validate_series(
    series: Series,
    allow_absent: bool = True,
    indicator_name: Optional[str] = None,
) -> None:
    """
    Check the positional and value invariants of a series.

    Args:
        series: Series to validate.
        allow_absent: When False, an absent value is rejected.
        indicator_name: Name used to prefix error messages.

    Raises:
        MalformedSeriesError: A position is not an integer, or does not
            follow its predecessor by exactly one (covers duplicates,
            gaps and decreasing positions).
        InvalidDataError: A value is NaN or infinite, or absent when
            ``allow_absent`` is False.
    """
    previous: Optional[int] = None
    for index, point in enumerate(series):
        position = point.position
        if isinstance(position, bool) or not isinstance(position, int):
            raise MalformedSeriesError(index, f"position {position!r} is not an integer", indicator_name)
        if previous is not None:
            if position == previous:
                raise MalformedSeriesError(index, f"duplicate position {position}", indicator_name)
            if position < previous:
                raise MalformedSeriesError(
                    index, f"position {position} decreases after {previous}", indicator_name
                )
            if position != previous + 1:
                raise MalformedSeriesError(
                    index, f"gap between positions {previous} and {position}", indicator_name
                )
        previous = position

        if point.value is None and not allow_absent:
            raise InvalidDataError("value", None, f"absent value at position {position}", indicator_name)
        validate_value(point.value, position, indicator_name)


def validate_value(value: Optional[float], position: int, indicator_name: Optional[str] = None) -> None:
    """Reject a NaN or infinite value; an absent value passes."""
    if value is None:
        return
    if math.isnan(value):
        raise InvalidDataError("value", value, f"NaN at position {position}", indicator_name)
    if math.isinf(value):
        raise InvalidDataError("value", value, f"infinite at position {position}", indicator_name)
