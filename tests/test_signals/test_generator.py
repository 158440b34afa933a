"""
Tests for the signal generator.
"""
import pytest
import pandas as pd
import numpy as np

from trendlab.indicators.technical import calculate_rsi
from trendlab.signals.config import BacktestParams
from trendlab.signals.generator import generate_signals
from trendlab.shared.types import SignalType, StrategyType


def _frame_from_closes(closes) -> pd.DataFrame:
    closes = np.asarray(closes, dtype=float)
    return pd.DataFrame({
        'Open': closes,
        'High': closes + 0.5,
        'Low': closes - 0.5,
        'Close': closes,
    }, index=pd.date_range('2023-01-02', periods=len(closes), freq='D'))


def _positions(result, signal_type):
    return [i for i, s in enumerate(result.signals) if s is signal_type]


@pytest.fixture
def dip_and_rally():
    """Choppy start, a sell-off, then a rally: RSI visits both extremes."""
    diffs = [1.0, -1.0] * 8 + [-3.0] * 10 + [3.0] * 15
    return _frame_from_closes(100 + np.concatenate([[0.0], np.cumsum(diffs)]))


@pytest.fixture
def rise_drop_rise():
    """Twenty rising bars, a five-bar drop, then a fifteen-bar rally."""
    return _frame_from_closes(
        list(range(100, 120)) + [110, 100, 90, 80, 70] + list(range(75, 150, 5))
    )


class TestMinimumLength:
    @pytest.mark.parametrize("strategy", list(StrategyType))
    def test_short_series_is_empty(self, strategy):
        result = generate_signals(_frame_from_closes(np.arange(10.0) + 100), strategy)
        assert result.is_empty
        assert result.indicators == {}

    def test_exactly_minimum_length(self):
        data = _frame_from_closes(np.arange(30.0) + 100)
        result = generate_signals(data, StrategyType.RSI)
        assert len(result.signals) == 30
        assert result.signals.index.equals(data.index)
        assert "rsi" in result.indicators

    def test_custom_floor(self):
        data = _frame_from_closes(np.arange(30.0) + 100)
        result = generate_signals(data, "rsi", BacktestParams(min_bars=31))
        assert result.is_empty


class TestRsiSignals:
    def test_signals_follow_threshold_crossings(self, dip_and_rally):
        result = generate_signals(dip_and_rally, StrategyType.RSI)
        rsi = calculate_rsi(dip_and_rally['Close'])
        enters = _positions(result, SignalType.ENTER)
        exits = _positions(result, SignalType.EXIT)
        assert len(enters) == 1
        assert len(exits) == 1
        i, j = enters[0], exits[0]
        assert rsi.iloc[i] < 30 and rsi.iloc[i - 1] >= 30
        assert rsi.iloc[j] > 70 and rsi.iloc[j - 1] <= 70
        assert i < j

    def test_first_bar_never_signals(self, dip_and_rally):
        result = generate_signals(dip_and_rally, StrategyType.RSI)
        assert result.signals.iloc[0] is SignalType.NONE

    def test_indicator_output_is_returned(self, dip_and_rally):
        result = generate_signals(dip_and_rally, "RSI")
        pd.testing.assert_series_equal(
            result.indicators["rsi"]["rsi"], calculate_rsi(dip_and_rally['Close']), check_names=False
        )


class TestGoldhandSignals:
    def test_enter_on_alignment_then_exit_on_reversal(self):
        closes = np.concatenate([np.arange(100.0, 160.0), np.arange(160.0, 100.0, -1.0)])
        result = generate_signals(_frame_from_closes(closes), StrategyType.GOLDHAND)
        enters = _positions(result, SignalType.ENTER)
        exits = _positions(result, SignalType.EXIT)
        # Bullish as soon as the slowest line warms up
        assert enters == [28]
        assert len(exits) == 1
        assert exits[0] > 60
        assert set(result.indicators["goldhand"].columns) == {"v1", "v2", "v3", "v4", "state"}


class TestMoneylineSignals:
    def test_flips(self, rise_drop_rise):
        result = generate_signals(rise_drop_rise, StrategyType.MONEYLINE)
        assert _positions(result, SignalType.EXIT) == [20]
        assert _positions(result, SignalType.ENTER) == [28]

    def test_multiplier_changes_line(self, rise_drop_rise):
        default = generate_signals(rise_drop_rise, StrategyType.MONEYLINE)
        wide = generate_signals(rise_drop_rise, StrategyType.MONEYLINE, BacktestParams(moneyline_mult=6.0))
        assert not default.indicators["moneyline"]["value"].equals(wide.indicators["moneyline"]["value"])
