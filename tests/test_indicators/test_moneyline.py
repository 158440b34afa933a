"""
Tests for the Moneyline trailing-trend line and its explicit state.
"""
import pytest
import pandas as pd
import numpy as np

from trendlab.indicators.moneyline import (
    TrendState,
    calculate_moneyline,
    moneyline_states,
    moneyline_flips,
)
from trendlab.shared.types import TrendDirection


def _frame_from_closes(closes) -> pd.DataFrame:
    closes = np.asarray(closes, dtype=float)
    return pd.DataFrame({
        'Open': closes,
        'High': closes + 0.5,
        'Low': closes - 0.5,
        'Close': closes,
    }, index=pd.date_range('2023-01-02', periods=len(closes), freq='D'))


@pytest.fixture
def up_then_drop():
    """Twenty rising bars followed by a sharp five-bar drop."""
    return _frame_from_closes(list(range(100, 120)) + [110, 100, 90, 80, 70])


class TestTrendState:
    """The state transition in isolation."""

    def test_up_eases_toward_long_stop(self):
        state = TrendState(100.0, TrendDirection.UP).advance(110.0, 2.0, mult=3.0, step_factor=0.5)
        assert state == TrendState(102.0, TrendDirection.UP)

    def test_up_never_moves_down(self):
        state = TrendState(100.0, TrendDirection.UP).advance(101.0, 1.0, mult=3.0, step_factor=0.6)
        assert state == TrendState(100.0, TrendDirection.UP)

    def test_up_flips_down_to_short_stop(self):
        state = TrendState(100.0, TrendDirection.UP).advance(99.0, 1.0, mult=3.0, step_factor=0.6)
        assert state == TrendState(102.0, TrendDirection.DOWN)

    def test_down_eases_toward_short_stop(self):
        state = TrendState(100.0, TrendDirection.DOWN).advance(90.0, 2.0, mult=3.0, step_factor=0.5)
        assert state == TrendState(98.0, TrendDirection.DOWN)

    def test_down_never_moves_up(self):
        state = TrendState(100.0, TrendDirection.DOWN).advance(99.0, 1.0, mult=3.0, step_factor=0.6)
        assert state == TrendState(100.0, TrendDirection.DOWN)

    def test_down_flips_up_to_long_stop(self):
        state = TrendState(100.0, TrendDirection.DOWN).advance(101.0, 1.0, mult=3.0, step_factor=0.6)
        assert state == TrendState(98.0, TrendDirection.UP)


class TestCalculateMoneyline:
    def test_undefined_during_atr_warmup(self, up_then_drop):
        ml = calculate_moneyline(up_then_drop, period=14)
        assert ml['value'].iloc[:14].isna().all()
        assert all(d is None for d in ml['direction'].iloc[:14])
        assert ml['value'].iloc[14:].notna().all()

    def test_first_defined_bar_starts_at_close_trending_up(self, up_then_drop):
        ml = calculate_moneyline(up_then_drop, period=14)
        assert ml['value'].iloc[14] == pytest.approx(114.0)
        assert ml['direction'].iloc[14] is TrendDirection.UP

    def test_single_down_flip_on_drop(self, up_then_drop):
        """Exactly one down-flip, at the first close below the previous line value."""
        ml = calculate_moneyline(up_then_drop, period=14)
        flips = moneyline_flips(ml)
        assert len(flips) == 1
        flip_time, direction = flips[0]
        assert direction is TrendDirection.DOWN

        closes = up_then_drop['Close'].to_numpy()
        values = ml['value'].to_numpy()
        first_breach = next(
            i for i in range(15, len(closes)) if closes[i] < values[i - 1]
        )
        assert first_breach == 20
        assert flip_time == up_then_drop.index[first_breach]

    def test_line_jumps_to_short_stop_on_flip(self, up_then_drop):
        ml = calculate_moneyline(up_then_drop, period=14, mult=3.0)
        atr = (1.5 * 13 + 9.5) / 14
        assert ml['value'].iloc[20] == pytest.approx(110.0 + 3.0 * atr)

    def test_states_match_frame(self, up_then_drop):
        states = moneyline_states(up_then_drop)
        ml = calculate_moneyline(up_then_drop)
        for state, value, direction in zip(states, ml['value'], ml['direction']):
            if state is None:
                assert np.isnan(value) and direction is None
            else:
                assert state.value == value and state.direction is direction

    def test_no_flips_without_reversal(self):
        ml = calculate_moneyline(_frame_from_closes(np.arange(100.0, 160.0)))
        assert moneyline_flips(ml) == []
        assert all(d is TrendDirection.UP for d in ml['direction'].iloc[14:])
