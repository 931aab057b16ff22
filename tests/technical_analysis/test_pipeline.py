"""End-to-end tests for the RSI overlay pipeline."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from rsiscope.technical_analysis.exceptions import (
    DegenerateComputationError,
    InsufficientDataError,
    InvalidDataError,
    InvalidParameterError,
    MalformedSeriesError,
)
from rsiscope.technical_analysis.pipeline import IndicatorParameters, run_pipeline
from rsiscope.technical_analysis.series import SeriesPoint, make_series


class TestIndicatorParameters:
    def test_defaults(self):
        params = IndicatorParameters()
        assert params.rsi_period == 14
        assert params.ema_period == 9
        assert params.wma_period == 45
        assert params.trailing_pad == 50
        assert params.degenerate_policy == 'clamp'

    def test_is_immutable(self):
        with pytest.raises(AttributeError):
            IndicatorParameters().rsi_period = 7

    @pytest.mark.parametrize("field", ["rsi_period", "ema_period", "wma_period"])
    def test_invalid_period(self, field):
        with pytest.raises(InvalidParameterError, match=field):
            IndicatorParameters(**{field: 0})

    def test_invalid_trailing_pad(self):
        with pytest.raises(InvalidParameterError):
            IndicatorParameters(trailing_pad=-1)

    def test_zero_trailing_pad_allowed(self):
        assert IndicatorParameters(trailing_pad=0).trailing_pad == 0

    def test_invalid_policy(self):
        with pytest.raises(InvalidParameterError):
            IndicatorParameters(degenerate_policy='nan')

    def test_from_config_partial(self):
        params = IndicatorParameters.from_config({'wma_period': 30, 'degenerate_policy': 'raise'})
        assert params.wma_period == 30
        assert params.degenerate_policy == 'raise'
        assert params.rsi_period == 14

    def test_from_config_none(self):
        assert IndicatorParameters.from_config(None) == IndicatorParameters()

    def test_from_config_unknown_key(self):
        with pytest.raises(InvalidParameterError, match="macd_period"):
            IndicatorParameters.from_config({'macd_period': 12})

    def test_to_dict_round_trip(self):
        params = IndicatorParameters(rsi_period=7)
        assert IndicatorParameters.from_config(params.to_dict()) == params


class TestRunPipeline:
    def test_default_parameters(self, long_series):
        aligned = run_pipeline(long_series)
        # RSI: 106 points from position 14; WMA(45) first value at RSI index 44
        assert len(aligned) == 106 + 50 - 44
        assert aligned.positions[0] == 14 + 44
        assert aligned.positions[-1] == 119 + 50

    def test_alignment_invariant(self, long_series):
        aligned = run_pipeline(long_series)
        assert len(aligned.rsi) == len(aligned.ema) == len(aligned.wma)
        for r, e, w in zip(aligned.rsi, aligned.ema, aligned.wma):
            assert r.position == e.position == w.position

    def test_positions_step_by_one(self, long_series):
        positions = run_pipeline(long_series).positions
        assert positions == list(range(positions[0], positions[0] + len(positions)))

    def test_rsi_bounds(self, long_series):
        aligned = run_pipeline(long_series)
        for series in (aligned.rsi, aligned.ema, aligned.wma):
            present = [p.value for p in series if p.value is not None]
            assert present
            assert all(0.0 <= v <= 100.0 for v in present)

    def test_trailing_padding(self, long_series):
        aligned = run_pipeline(long_series, IndicatorParameters(trailing_pad=5))
        assert [p.value for p in aligned.rsi[-5:]] == [None] * 5
        assert aligned.rsi[-6].value is not None

    def test_deterministic(self, long_series):
        params = IndicatorParameters(ema_period=5, wma_period=20)
        assert run_pipeline(long_series, params) == run_pipeline(long_series, params)

    def test_concurrent_runs_agree(self, long_series):
        expected = run_pipeline(long_series)
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: run_pipeline(long_series), range(8)))
        assert all(result == expected for result in results)

    def test_scenario_with_short_overlays(self, scenario_series):
        params = IndicatorParameters(ema_period=3, wma_period=4, trailing_pad=2)
        aligned = run_pipeline(scenario_series, params)
        # RSI 6 points (14..19), WMA(4) starts at RSI index 3
        assert aligned.positions == [17, 18, 19, 20, 21]
        assert aligned.rsi[0].value is not None

    def test_fifteen_points_too_short_for_overlays(self):
        series = make_series([100 + (i % 3) for i in range(15)])
        with pytest.raises(InsufficientDataError) as exc_info:
            run_pipeline(series)
        assert exc_info.value.indicator_name == "EMA"
        assert exc_info.value.current_count == 1
        assert exc_info.value.required_count == 9

    def test_rsi_too_short(self):
        with pytest.raises(InsufficientDataError) as exc_info:
            run_pipeline(make_series(range(10)))
        assert exc_info.value.indicator_name == "RSI"

    def test_wma_too_short(self):
        # 40 RSI points: enough for EMA(9), not for WMA(45)
        series = make_series([100 + (i % 5) for i in range(54)])
        with pytest.raises(InsufficientDataError) as exc_info:
            run_pipeline(series)
        assert exc_info.value.indicator_name == "WMA"

    def test_all_increasing_clamped(self):
        series = make_series([float(i) for i in range(80)])
        aligned = run_pipeline(series)
        present = [p.value for p in aligned.rsi if p.value is not None]
        assert present == [100.0] * len(present)
        assert all(p.value == pytest.approx(100.0) for p in aligned.ema if p.value is not None)

    def test_all_increasing_raises_under_raise_policy(self):
        series = make_series([float(i) for i in range(80)])
        with pytest.raises(DegenerateComputationError):
            run_pipeline(series, IndicatorParameters(degenerate_policy='raise'))

    def test_absent_input_rejected(self, long_series):
        series = list(long_series)
        series[3] = SeriesPoint(3, None)
        with pytest.raises(InvalidDataError):
            run_pipeline(series)

    def test_malformed_input_rejected(self, long_series):
        series = list(long_series)
        series[50] = SeriesPoint(49, 1.0)
        with pytest.raises(MalformedSeriesError):
            run_pipeline(series)
