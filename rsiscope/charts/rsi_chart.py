# rsiscope/charts/rsi_chart.py

"""
RSI chart with EMA and WMA overlays.

Turns an ``AlignedSeries`` into a plotly figure: one line per series, broken
wherever a value is absent, dashed reference lines at 30/50/70 and a fixed
0-100 y axis.
"""

import logging
from typing import List, Optional, Sequence, Union

import pandas as pd
import plotly.graph_objects as go

from rsiscope.technical_analysis.alignment import AlignedSeries
from rsiscope.technical_analysis.pipeline import IndicatorParameters
from rsiscope.technical_analysis.series import values

logger = logging.getLogger(__name__)

COLORS = {
    'rsi': 'black',
    'ema': 'blue',
    'wma': 'orange',
    'strip': '#cccccc',
}
STRIP_LEVELS = (70, 50, 30)


def positions_to_times(positions: Sequence[int], open_times: pd.Series) -> List[pd.Timestamp]:
    """
    Map series positions to bar open times.

    Positions inside the frame take the bar's open time. Positions past the
    last bar (the trailing pad) are extrapolated with the spacing of the
    last two bars.

    Raises:
        ValueError: If ``open_times`` is empty or a position is negative.
    """
    times = list(open_times)
    if not times:
        raise ValueError("open_times is empty")

    last_index = len(times) - 1
    step = times[-1] - times[-2] if len(times) > 1 else pd.Timedelta(0)

    mapped = []
    for position in positions:
        if position < 0:
            raise ValueError(f"Negative position {position}")
        if position <= last_index:
            mapped.append(times[position])
        else:
            mapped.append(times[-1] + step * (position - last_index))
    return mapped


def build_rsi_figure(
    aligned: AlignedSeries,
    interval: str,
    params: Optional[IndicatorParameters] = None,
    open_times: Optional[pd.Series] = None,
) -> go.Figure:
    """
    Build the RSI chart figure.

    Args:
        aligned: Output of the pipeline.
        interval: Bar interval shown in the title, e.g. '15m'.
        params: Parameters used for the legend labels; defaults when omitted.
        open_times: Bar open times to use on the x axis instead of positions.

    Returns:
        go.Figure with the RSI, EMA and WMA traces.
    """
    params = params or IndicatorParameters()

    x: List[Union[int, pd.Timestamp]]
    if open_times is not None:
        x = positions_to_times(aligned.positions, open_times)
    else:
        x = aligned.positions

    fig = go.Figure()
    traces = [
        ('rsi', aligned.rsi, f"RSI {params.rsi_period}"),
        ('ema', aligned.ema, f"EMA {params.ema_period} (RSI)"),
        ('wma', aligned.wma, f"WMA {params.wma_period} (RSI)"),
    ]
    for key, series, label in traces:
        fig.add_trace(go.Scatter(
            x=x,
            y=values(series),
            mode='lines',
            name=label,
            line=dict(color=COLORS[key], width=1.5),
            connectgaps=False,
        ))

    for level in STRIP_LEVELS:
        fig.add_hline(
            y=level,
            line=dict(color=COLORS['strip'], dash='dash', width=1),
            annotation_text=str(level),
            annotation_position='top left',
        )

    fig.update_layout(
        title=f"RSI Chart ({interval})",
        yaxis=dict(range=[0, 100]),
        plot_bgcolor='white',
        legend=dict(x=1.0, y=1.0, xanchor='right'),
    )

    logger.debug(f"Built RSI figure with {len(aligned)} points for interval {interval}")
    return fig
