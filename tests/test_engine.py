"""
Tests for the end-to-end backtest pipeline.
"""
import pytest
import pandas as pd
import numpy as np

from trendlab import run_backtest
from trendlab.evaluation.types import BacktestSummary
from trendlab.signals.config import BacktestParams, StrategyConfig
from trendlab.shared.types import StrategyType, TradeStatus


def _frame_from_closes(closes) -> pd.DataFrame:
    closes = np.asarray(closes, dtype=float)
    return pd.DataFrame({
        'Open': closes,
        'High': closes + 0.5,
        'Low': closes - 0.5,
        'Close': closes,
    }, index=pd.date_range('2023-01-02', periods=len(closes), freq='D'))


@pytest.fixture
def rise_drop_rise():
    return _frame_from_closes(
        list(range(100, 120)) + [110, 100, 90, 80, 70] + list(range(75, 150, 5))
    )


@pytest.fixture
def wave():
    x = np.arange(150)
    return _frame_from_closes(100 + 10 * np.sin(x / 8.0) + x * 0.05)


class TestShortSeries:
    @pytest.mark.parametrize("strategy", list(StrategyType))
    def test_below_minimum_length(self, strategy):
        result = run_backtest(_frame_from_closes(np.arange(10.0) + 100), strategy)
        assert result.trades == []
        assert result.indicators == {}
        assert result.summary == BacktestSummary()
        assert result.summary.total_trades == 0
        assert result.summary.cumulative_result == 1
        assert result.summary.win_ratio == 0
        assert result.to_dict() == {"trades": [], "indicators": {}}


class TestMoneylineRun:
    def test_exit_while_flat_is_ignored(self, rise_drop_rise):
        result = run_backtest(rise_drop_rise, "moneyline")
        assert len(result.trades) == 1
        trade = result.trades[0]
        # Entry signal on bar 28 fills at bar 29's open
        assert trade.entry_index == 29
        assert trade.entry_price == 95.0
        assert trade.status is TradeStatus.OPEN
        assert trade.result == pytest.approx(145.0 / 95.0)
        assert trade.duration == 10

    def test_summary_matches_ledger(self, rise_drop_rise):
        result = run_backtest(rise_drop_rise, StrategyType.MONEYLINE)
        assert result.summary.total_trades == 1
        assert result.summary.cumulative_result == pytest.approx(145.0 / 95.0)
        assert result.summary.hold_result == pytest.approx(145.0 / 100.0)

    def test_serialization(self, rise_drop_rise):
        d = run_backtest(rise_drop_rise, StrategyType.MONEYLINE).to_dict()
        assert set(d) == {"trades", "indicators"}
        assert d["trades"][0]["status"] == "open"
        assert d["trades"][0]["exit_time"] is None
        assert d["trades"][0]["entry_time"].startswith("2023-01-31")
        line = d["indicators"]["moneyline"]
        assert len(line["value"]) == len(rise_drop_rise)
        assert line["value"][0] is None
        assert line["direction"][0] is None
        assert line["direction"][19] == 1
        assert line["direction"][20] == -1


class TestPipeline:
    @pytest.mark.parametrize("strategy", list(StrategyType))
    def test_rerun_is_identical(self, wave, strategy):
        first = run_backtest(wave, strategy)
        second = run_backtest(wave, strategy)
        assert first.trades == second.trades
        assert first.summary == second.summary

    @pytest.mark.parametrize("strategy", list(StrategyType))
    def test_single_position(self, wave, strategy):
        trades = run_backtest(wave, strategy).trades
        assert all(t.status is TradeStatus.CLOSED for t in trades[:-1])
        for a, b in zip(trades, trades[1:]):
            assert a.exit_index < b.entry_index

    def test_bars_input(self, rise_drop_rise):
        bars = [
            {
                "time": t.strftime("%Y-%m-%d"),
                "open": row.Open, "high": row.High, "low": row.Low, "close": row.Close,
            }
            for t, row in rise_drop_rise.iterrows()
        ]
        from_bars = run_backtest(bars, "moneyline")
        from_frame = run_backtest(rise_drop_rise, "moneyline")
        assert from_bars.trades == from_frame.trades
        assert from_bars.summary == from_frame.summary

    def test_string_dated_frame_uses_calendar_days(self, rise_drop_rise):
        string_indexed = rise_drop_rise.copy()
        string_indexed.index = [t.strftime("%Y-%m-%d") for t in rise_drop_rise.index]
        from_strings = run_backtest(string_indexed, "moneyline")
        assert from_strings.trades == run_backtest(rise_drop_rise, "moneyline").trades
        assert from_strings.trades[0].duration == 10

    def test_strategy_config(self, rise_drop_rise):
        config = StrategyConfig(
            name="wide", strategy="trend-line", params=BacktestParams(moneyline_mult=6.0),
        )
        result = run_backtest(rise_drop_rise, config)
        assert result.strategy is StrategyType.MONEYLINE
        assert not result.indicators["moneyline"]["value"].equals(
            run_backtest(rise_drop_rise, "moneyline").indicators["moneyline"]["value"]
        )

    def test_params_override_config(self, rise_drop_rise):
        config = StrategyConfig(name="strict", strategy="moneyline", params=BacktestParams(min_bars=100))
        assert run_backtest(rise_drop_rise, config).trades == []
        assert run_backtest(rise_drop_rise, config, BacktestParams()).trades != []

    def test_unknown_strategy(self, wave):
        with pytest.raises(ValueError, match="Unknown strategy"):
            run_backtest(wave, "breakout")
