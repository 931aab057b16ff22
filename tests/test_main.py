"""Tests for the command line entry point. The price feed is mocked."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pandas as pd
import pytest

import main
from rsiscope.utils.binance_exceptions import BinanceAPIError

CONFIG = """
feed_settings:
  symbol: BTCUSDT
  interval: 15m
  limit: 120
indicator_settings:
  rsi_period: 14
  ema_period: 9
  wma_period: 45
  trailing_pad: 50
logging:
  version: 1
  disable_existing_loggers: false
  root:
    level: WARNING
"""


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / 'config.yml'
    path.write_text(CONFIG)
    return str(path)


@pytest.fixture
def feed(long_series):
    frame = pd.DataFrame({
        'open_time': pd.date_range('2024-01-01', periods=len(long_series), freq='15min', tz='UTC'),
        'close': [p.value for p in long_series],
    })
    with patch('main.BinanceClient') as client_cls, \
         patch('main.fetch_price_series', return_value=(long_series, frame)) as fetch:
        yield {'client_cls': client_cls, 'fetch': fetch}


def test_json_output(config_path, feed, capsys):
    assert main.main(['--config', config_path, '--format', 'json']) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload['symbol'] == 'BTCUSDT'
    assert payload['interval'] == '15m'
    assert payload['parameters']['wma_period'] == 45
    assert len(payload['points']) == 112
    assert payload['points'][-1] == {'position': 169, 'rsi': None, 'ema': None, 'wma': None}
    feed['fetch'].assert_called_once_with(feed['client_cls'].return_value, 'BTCUSDT', '15m', limit=120)


def test_cli_overrides_config(config_path, feed, capsys):
    args = ['--config', config_path, '--format', 'json', '--symbol', 'ETHUSDT',
            '--interval', '1h', '--wma-period', '20', '--trailing-pad', '0']
    assert main.main(args) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload['parameters']['wma_period'] == 20
    assert payload['points'][-1]['rsi'] is not None
    assert feed['fetch'].call_args.args[1:] == ('ETHUSDT', '1h')


def test_chart_output(config_path, feed):
    with patch('main.build_rsi_figure') as build:
        assert main.main(['--config', config_path]) == 0
    build.return_value.show.assert_called_once()
    assert build.call_args.args[1] == '15m'


def test_feed_error_exits_non_zero(config_path, feed):
    feed['fetch'].side_effect = BinanceAPIError(429, "Rate limit exceeded (429)", should_retry=True)
    assert main.main(['--config', config_path, '--format', 'json']) == 1


def test_insufficient_data_exits_non_zero(config_path, feed, long_series):
    feed['fetch'].return_value = (long_series[:15], MagicMock())
    assert main.main(['--config', config_path, '--format', 'json']) == 1


def test_invalid_parameter_exits_non_zero(config_path, feed):
    assert main.main(['--config', config_path, '--format', 'json', '--rsi-period', '0']) == 1


def test_zero_limit_is_passed_through(config_path, feed):
    feed['fetch'].side_effect = ValueError("limit must be between 1 and 1000, got 0")
    assert main.main(['--config', config_path, '--format', 'json', '--limit', '0']) == 1
    assert feed['fetch'].call_args.kwargs['limit'] == 0
