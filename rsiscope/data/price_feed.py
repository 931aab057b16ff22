# rsiscope/data/price_feed.py

"""
Price feed adapter: Binance klines to the raw input series.

The pipeline only sees ``(position, close)`` points; the frame with the
open times is kept alongside so the renderer can map positions back to
wall-clock time.
"""

import logging
from typing import Any, List, Sequence, Tuple

import pandas as pd

from rsiscope.technical_analysis.series import SeriesPoint, make_series
from rsiscope.utils.binance_client import BinanceClient

logger = logging.getLogger(__name__)

KLINE_COLUMNS = [
    'open_time', 'open', 'high', 'low', 'close', 'volume', 'close_time',
    'quote_volume', 'trades', 'taker_buy_base', 'taker_buy_quote', 'ignore',
]
PRICE_COLUMNS = ['open', 'high', 'low', 'close', 'volume']


def klines_to_frame(klines: Sequence[Sequence[Any]]) -> pd.DataFrame:
    """
    Parse raw kline rows into a typed DataFrame.

    Prices/volume become floats and open/close times UTC timestamps. Rows
    keep the order Binance returned them in (oldest first).

    Raises:
        ValueError: If a row does not have the twelve kline fields.
    """
    for index, row in enumerate(klines):
        if len(row) != len(KLINE_COLUMNS):
            raise ValueError(f"Kline row {index} has {len(row)} fields, expected {len(KLINE_COLUMNS)}")

    df = pd.DataFrame(list(klines), columns=KLINE_COLUMNS)
    df[PRICE_COLUMNS] = df[PRICE_COLUMNS].astype(float)
    df['open_time'] = pd.to_datetime(df['open_time'], unit='ms', utc=True)
    df['close_time'] = pd.to_datetime(df['close_time'], unit='ms', utc=True)
    return df.drop(columns=['ignore'])


def frame_to_series(df: pd.DataFrame, field: str = 'close') -> List[SeriesPoint]:
    """Series of ``field`` values with positions 0..len(df)-1."""
    if field not in df.columns:
        raise ValueError(f"Missing required column: {field}")
    return make_series(df[field].tolist())


def fetch_price_series(
    client: BinanceClient,
    symbol: str,
    interval: str,
    limit: int = 200,
    field: str = 'close',
) -> Tuple[List[SeriesPoint], pd.DataFrame]:
    """
    Fetch klines and return the raw input series with its source frame.

    Raises:
        BinanceAPIError: Propagated from the client.
    """
    df = klines_to_frame(client.get_klines(symbol, interval, limit=limit))
    logger.info(f"Loaded {len(df)} {interval} bars for {symbol}")
    return frame_to_series(df, field), df
