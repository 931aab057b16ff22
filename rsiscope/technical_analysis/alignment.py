"""
Alignment and padding of indicator series for plotting.

RSI, EMA(RSI) and WMA(RSI) come out of their engines with different lengths
because each has its own warm-up. This stage puts the two overlays back on
the RSI positions, appends a trailing display margin and cuts the leading
region where either overlay has no value yet, so the three results are
congruent: equal length and identical positions at every index.

Example:
    >>> aligned = align_series(rsi, ema, wma, trailing_pad=50)
    >>> assert aligned.rsi[0].position == aligned.ema[0].position == aligned.wma[0].position
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

import pandas as pd

from .exceptions import InsufficientDataError, InvalidParameterError, MalformedSeriesError
from .series import Series, SeriesPoint, absent_points, first_present_index, positions, validate_series

logger = logging.getLogger(__name__)

DEFAULT_TRAILING_PAD = 50


@dataclass(frozen=True)
class AlignedSeries:
    """Three congruent series ready for the renderer."""

    rsi: List[SeriesPoint]
    ema: List[SeriesPoint]
    wma: List[SeriesPoint]

    def __len__(self) -> int:
        return len(self.rsi)

    @property
    def positions(self) -> List[int]:
        return positions(self.rsi)

    def to_records(self) -> List[Dict[str, Any]]:
        """One plain dict per position, absent values as None."""
        return [
            {'position': r.position, 'rsi': r.value, 'ema': e.value, 'wma': w.value}
            for r, e, w in zip(self.rsi, self.ema, self.wma)
        ]

    def to_frame(self) -> pd.DataFrame:
        """DataFrame indexed by position with rsi/ema/wma columns, absent as NaN."""
        frame = pd.DataFrame.from_records(
            self.to_records(), columns=['position', 'rsi', 'ema', 'wma']
        )
        return frame.set_index('position').astype(float)


def pad_start_to_match(reference: Series, target: Series) -> List[SeriesPoint]:
    """
    Left-pad ``target`` with absent points so it lines up with ``reference``.

    The pad takes the earliest ``len(reference) - len(target)`` positions of
    the reference. After padding, every index must hold the same position in
    both series.

    Raises:
        MalformedSeriesError: ``target`` is longer than ``reference`` or its
            positions do not fall on the reference positions.
    """
    pad_length = len(reference) - len(target)
    if pad_length < 0:
        raise MalformedSeriesError(
            len(reference),
            f"derived series has {len(target)} points, reference only {len(reference)}",
        )

    padded = absent_points(point.position for point in reference[:pad_length])
    padded.extend(target)

    for index, (ref_point, point) in enumerate(zip(reference, padded)):
        if ref_point.position != point.position:
            raise MalformedSeriesError(
                index,
                f"position {point.position} does not line up with reference position {ref_point.position}",
            )
    return padded


def extend_with_padding(series: Series, last_position: int, count: int) -> List[SeriesPoint]:
    """Copy of ``series`` followed by ``count`` absent points after ``last_position``."""
    extended = list(series)
    extended.extend(absent_points(range(last_position + 1, last_position + count + 1)))
    return extended


def align_series(
    rsi: Series,
    ema: Series,
    wma: Series,
    trailing_pad: int = DEFAULT_TRAILING_PAD,
) -> AlignedSeries:
    """
    Reconcile RSI and its two overlays into congruent series.

    Steps:
        1. Left-pad EMA and WMA with absent points onto the RSI positions.
        2. Find the first present index of each padded overlay.
        3. Append ``trailing_pad`` absent points to all three, continuing
           from the last RSI position.
        4. Drop everything before ``max(ema_start, wma_start)``.

    Args:
        rsi: Reference series (RSI output).
        ema: EMA of the RSI output.
        wma: WMA of the RSI output.
        trailing_pad: Number of absent points appended for display margin.

    Raises:
        InsufficientDataError: RSI is empty or an overlay has no value at all.
        MalformedSeriesError: An input is not contiguous, or an overlay cannot be
            placed on RSI positions.
        InvalidDataError: An input holds a NaN or infinite value.
        InvalidParameterError: ``trailing_pad`` is negative or not an integer.
    """
    if isinstance(trailing_pad, bool) or not isinstance(trailing_pad, int) or trailing_pad < 0:
        raise InvalidParameterError("trailing_pad", trailing_pad, "non-negative integer")
    if not rsi:
        raise InsufficientDataError(0, 1, "Alignment")
    validate_series(rsi, indicator_name="Alignment")
    validate_series(ema, indicator_name="EMA")
    validate_series(wma, indicator_name="WMA")

    padded_ema = pad_start_to_match(rsi, ema)
    padded_wma = pad_start_to_match(rsi, wma)

    ema_start = first_present_index(padded_ema)
    wma_start = first_present_index(padded_wma)
    if ema_start < 0:
        raise InsufficientDataError(0, 1, "EMA")
    if wma_start < 0:
        raise InsufficientDataError(0, 1, "WMA")

    last_position = rsi[-1].position
    start = max(ema_start, wma_start)

    aligned = AlignedSeries(
        rsi=extend_with_padding(rsi, last_position, trailing_pad)[start:],
        ema=extend_with_padding(padded_ema, last_position, trailing_pad)[start:],
        wma=extend_with_padding(padded_wma, last_position, trailing_pad)[start:],
    )

    logger.debug(
        f"Aligned series: ema_start={ema_start}, wma_start={wma_start}, "
        f"trailing_pad={trailing_pad}, length={len(aligned)}"
    )
    return aligned
