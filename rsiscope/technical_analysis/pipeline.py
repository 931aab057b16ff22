"""
RSI overlay pipeline: raw closes to three aligned, plot-ready series.

    raw series -> RSI -> {EMA(RSI), WMA(RSI)} -> alignment

``run_pipeline`` is a pure function of its input series and parameters. Any
error aborts the run and no partial result is returned.
"""

import logging
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional

from .alignment import DEFAULT_TRAILING_PAD, AlignedSeries, align_series
from .exceptions import InvalidParameterError
from .base import validate_period
from .indicators.momentum import DEGENERATE_POLICIES, compute_rsi
from .indicators.trend import compute_ema, compute_wma
from .series import Series, validate_series

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndicatorParameters:
    """
    Immutable configuration for one pipeline run.

    Attributes:
        rsi_period: RSI period (default 14).
        ema_period: EMA period applied to RSI (default 9).
        wma_period: WMA period applied to RSI (default 45).
        trailing_pad: Absent points appended for display margin (default 50).
        degenerate_policy: 'clamp' (RSI = 100 on zero average loss) or 'raise'.
    """

    rsi_period: int = 14
    ema_period: int = 9
    wma_period: int = 45
    trailing_pad: int = DEFAULT_TRAILING_PAD
    degenerate_policy: str = 'clamp'

    def __post_init__(self):
        validate_period(self.rsi_period, "rsi_period")
        validate_period(self.ema_period, "ema_period")
        validate_period(self.wma_period, "wma_period")
        if isinstance(self.trailing_pad, bool) or not isinstance(self.trailing_pad, int) or self.trailing_pad < 0:
            raise InvalidParameterError("trailing_pad", self.trailing_pad, "non-negative integer")
        if self.degenerate_policy not in DEGENERATE_POLICIES:
            raise InvalidParameterError(
                "degenerate_policy", self.degenerate_policy, f"one of {list(DEGENERATE_POLICIES)}"
            )

    @classmethod
    def from_config(cls, settings: Optional[Dict[str, Any]]) -> 'IndicatorParameters':
        """
        Build parameters from the ``indicator_settings`` config section.

        Missing keys keep their defaults; unknown keys are rejected.

        Raises:
            InvalidParameterError: Unknown key or invalid value.
        """
        settings = dict(settings or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(settings) - known)
        if unknown:
            raise InvalidParameterError("indicator_settings", unknown, f"keys among {sorted(known)}")
        return cls(**settings)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def run_pipeline(series: Series, params: Optional[IndicatorParameters] = None) -> AlignedSeries:
    """
    Compute RSI, EMA(RSI) and WMA(RSI) and align them for plotting.

    Args:
        series: Raw price series, all values present, contiguous positions.
        params: Indicator parameters; defaults when omitted.

    Returns:
        AlignedSeries with three congruent series.

    Raises:
        MalformedSeriesError: Input positions are not contiguous.
        InvalidDataError: Input holds absent, NaN or infinite values.
        InsufficientDataError: Input or RSI output is too short for a period.
        DegenerateComputationError: Zero average loss under the 'raise' policy.
    """
    params = params or IndicatorParameters()
    validate_series(series, allow_absent=False, indicator_name="Pipeline")

    logger.info(
        f"Running RSI pipeline on {len(series)} points "
        f"(rsi={params.rsi_period}, ema={params.ema_period}, wma={params.wma_period}, "
        f"pad={params.trailing_pad}, policy={params.degenerate_policy})"
    )

    rsi = compute_rsi(series, params.rsi_period, params.degenerate_policy)
    ema = compute_ema(rsi, params.ema_period)
    wma = compute_wma(rsi, params.wma_period)

    aligned = align_series(rsi, ema, wma, params.trailing_pad)
    logger.info(
        f"Pipeline produced {len(aligned)} aligned points "
        f"(rsi={len(rsi)}, ema={len(ema)}, wma={len(wma)})"
    )
    return aligned
