# rsiscope/utils/binance_client.py

"""
Thin Binance spot klines client.

Wraps python-binance's public klines endpoint (``/api/v3/klines``) and turns
library errors into ``BinanceAPIError`` with a ``should_retry`` hint. Each
call is a single request; retrying is left to the caller.
"""

import logging
from typing import Any, Dict, List, Optional

from binance.client import Client
from binance.exceptions import BinanceAPIException, BinanceRequestException

from rsiscope.utils.binance_exceptions import BinanceAPIError

logger = logging.getLogger(__name__)

MAX_KLINES_LIMIT = 1000


class BinanceClient:
    """
    Wrapper for the Binance spot klines endpoint.

    Examples:
        # Anonymous mainnet mode (public data only)
        >>> client = BinanceClient({'testnet': False})
        >>> klines = client.get_klines('BTCUSDT', '15m', limit=200)
    """

    def __init__(self, credentials: Optional[Dict[str, Any]] = None, client: Optional[Client] = None):
        """
        Initialize Binance client.

        Args:
            credentials: Dictionary with optional keys:
                - api_key / api_secret: only both or neither
                - testnet (bool): Use testnet (default: False)
            client: Pre-built python-binance ``Client`` to use instead.

        Raises:
            ValueError: If api_key is provided without api_secret (or vice versa)
        """
        credentials = credentials or {}
        self.api_key = credentials.get('api_key')
        self.api_secret = credentials.get('api_secret')
        self.is_testnet = credentials.get('testnet', False)

        has_key = self.api_key is not None
        has_secret = self.api_secret is not None
        if has_key != has_secret:
            raise ValueError(
                "Both api_key and api_secret must be provided together, or neither. "
                "You provided only one."
            )

        self.mode = 'authenticated' if has_key else 'anonymous'
        env = 'TESTNET' if self.is_testnet else 'MAINNET'
        if client is not None:
            self.client = client
        else:
            self.client = Client(api_key=self.api_key, api_secret=self.api_secret, testnet=self.is_testnet)
        logger.info(f"BinanceClient initialized: {self.mode} mode ({env})")

    def get_klines(self, symbol: str, interval: str, limit: int = 200) -> List[List[Any]]:
        """
        Fetch the most recent klines for a symbol.

        Args:
            symbol: Trading pair (e.g., 'BTCUSDT')
            interval: Candlestick interval (e.g., '1m', '15m', '1h', '1d')
            limit: Number of candles, 1..1000 (default 200)

        Returns:
            List of klines, each
            [open_time, open, high, low, close, volume, close_time,
             quote_volume, trades, taker_buy_base, taker_buy_quote, ignore]
            with prices as strings and times in milliseconds.

        Raises:
            ValueError: If limit is out of range
            BinanceAPIError: On API or transport errors (check should_retry)
        """
        if not 1 <= limit <= MAX_KLINES_LIMIT:
            raise ValueError(f"limit must be between 1 and {MAX_KLINES_LIMIT}, got {limit}")

        logger.debug(f"Fetching klines for {symbol} (interval={interval}, limit={limit})")
        try:
            klines = self.client.get_klines(symbol=symbol, interval=interval, limit=limit)
        except BinanceAPIException as e:
            error = self._parse_binance_exception(e)
            logger.error(f"Klines request failed for {symbol}: {error}")
            raise error from e
        except BinanceRequestException as e:
            error = BinanceAPIError(0, f"Invalid response: {e.message}", should_retry=True)
            logger.error(f"Klines request failed for {symbol}: {error}")
            raise error from e

        logger.info(f"Fetched {len(klines)} klines for {symbol} ({interval})")
        return klines

    def _parse_binance_exception(self, exception: BinanceAPIException) -> BinanceAPIError:
        """
        Parse BinanceAPIException into our error with retry guidance.

        Error categories:
        - Transient: 429 (rate limit), 5xx (server error)
        - Fatal: 418 (IP ban), 401 (auth), 400 (bad request, e.g. unknown symbol)
        """
        status_code = exception.status_code
        message = exception.message

        if status_code == 429:
            return BinanceAPIError(429, "Rate limit exceeded (429)", should_retry=True)
        elif status_code >= 500:
            return BinanceAPIError(status_code, f"Server error: {message}", should_retry=True)
        elif status_code == 418:
            return BinanceAPIError(418, "IP auto-banned (418). Stop all requests immediately!", should_retry=False)
        elif status_code == 401:
            return BinanceAPIError(401, "Unauthorized. Check API credentials.", should_retry=False)
        elif status_code == 400:
            return BinanceAPIError(400, f"Bad request: {message}", should_retry=False)
        else:
            return BinanceAPIError(status_code, f"API error: {message}", should_retry=False)
