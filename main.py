# main.py
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rsiscope.core import ConfigLoader, setup_logging
from rsiscope.charts.rsi_chart import build_rsi_figure
from rsiscope.data.price_feed import fetch_price_series
from rsiscope.technical_analysis import IndicatorError, IndicatorParameters, run_pipeline
from rsiscope.utils.binance_client import BinanceClient
from rsiscope.utils.binance_exceptions import BinanceAPIError

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / 'config.yml'

OVERRIDE_KEYS = ('rsi_period', 'ema_period', 'wma_period', 'trailing_pad', 'degenerate_policy')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="RSI chart with EMA and WMA overlays",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                                # BTCUSDT 15m from config.yml, open chart
  python main.py --interval 1h --format json    # print aligned series as JSON
  python main.py --symbol ETHUSDT --wma-period 30
        """
    )
    parser.add_argument("--config", default=str(DEFAULT_CONFIG_PATH), help="Path to config.yml")
    parser.add_argument("--symbol", help="Trading pair, e.g. BTCUSDT")
    parser.add_argument("--interval", help="Kline interval, e.g. 15m")
    parser.add_argument("--limit", type=int, help="Number of klines to fetch")
    parser.add_argument("--rsi-period", dest="rsi_period", type=int)
    parser.add_argument("--ema-period", dest="ema_period", type=int)
    parser.add_argument("--wma-period", dest="wma_period", type=int)
    parser.add_argument("--trailing-pad", dest="trailing_pad", type=int)
    parser.add_argument("--degenerate-policy", dest="degenerate_policy", choices=["clamp", "raise"])
    parser.add_argument(
        "--format",
        choices=["chart", "json"],
        default="chart",
        help="Open the plotly chart or print aligned series as JSON (default: chart)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config_loader = ConfigLoader(config_path=args.config)
    setup_logging(config_loader.get_section('logging'))

    feed_settings = config_loader.get_section('feed_settings')
    symbol = args.symbol or feed_settings.get('symbol', 'BTCUSDT')
    interval = args.interval or feed_settings.get('interval', '15m')
    limit = args.limit if args.limit is not None else feed_settings.get('limit', 200)

    indicator_settings = config_loader.get_section('indicator_settings')
    for key in OVERRIDE_KEYS:
        override = getattr(args, key)
        if override is not None:
            indicator_settings[key] = override

    try:
        params = IndicatorParameters.from_config(indicator_settings)
        client = BinanceClient({'testnet': feed_settings.get('testnet', False)})
        closes, frame = fetch_price_series(client, symbol, interval, limit=limit)
        aligned = run_pipeline(closes, params)
    except (IndicatorError, BinanceAPIError, ValueError) as e:
        logging.error(f"RSI chart generation failed for {symbol} ({interval}): {e}")
        return 1

    if args.format == "json":
        payload = {
            'symbol': symbol,
            'interval': interval,
            'parameters': params.to_dict(),
            'points': aligned.to_records(),
        }
        json.dump(payload, sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        fig = build_rsi_figure(aligned, interval, params, open_times=frame['open_time'])
        fig.show()

    logging.info(f"Done: {len(aligned)} aligned points for {symbol} ({interval})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
