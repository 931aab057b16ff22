# rsiscope/utils/binance_exceptions.py

"""
Custom exceptions for the Binance price feed.
Carries the HTTP status and whether a caller-side retry makes sense.
"""


class BinanceAPIError(Exception):
    """
    Error raised when fetching klines from Binance fails.

    Attributes:
        status_code: HTTP status code (e.g., 429, 418, 500); 0 when the
            failure did not come from the API itself
        message: Human-readable error description
        should_retry: Whether the error is transient. The feed never retries
            on its own; the flag is guidance for whoever calls it.

    Examples:
        >>> try:
        ...     client.get_klines('BTCUSDT', '15m')
        ... except BinanceAPIError as e:
        ...     if e.should_retry:
        ...         print("Temporary issue, try again later")
    """

    def __init__(self, status_code: int, message: str, should_retry: bool = False):
        self.status_code = status_code
        self.message = message
        self.should_retry = should_retry
        super().__init__(f"[{status_code}] {message}")
