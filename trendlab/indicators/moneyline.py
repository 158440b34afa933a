"""
Moneyline: an ATR-driven trailing-trend line.

The line ratchets in the direction of the prevailing trend, easing a
fraction of the way toward the ATR stop on every bar, and only reverses
when the close breaches it. The running (value, direction) pair is carried
from bar to bar as an explicit TrendState.
"""
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

import numpy as np
import pandas as pd

from .technical import calculate_atr
from ..shared.defaults import MONEYLINE_PERIOD, MONEYLINE_MULT, MONEYLINE_STEP
from ..shared.types import TrendDirection


@dataclass(frozen=True)
class TrendState:
    """Moneyline value and direction at one bar."""
    value: float
    direction: TrendDirection

    def advance(
        self,
        close: float,
        atr: float,
        mult: float = MONEYLINE_MULT,
        step_factor: float = MONEYLINE_STEP,
    ) -> "TrendState":
        """
        Next state given this bar's close and ATR.

        Up: a close below the line flips down and jumps to close + ATR * mult;
        otherwise the line eases toward max(close - ATR * mult, line).
        Down mirrors this.
        """
        long_stop = close - atr * mult
        short_stop = close + atr * mult

        if self.direction is TrendDirection.UP:
            if close < self.value:
                return TrendState(short_stop, TrendDirection.DOWN)
            target = max(long_stop, self.value)
            return TrendState(self.value + (target - self.value) * step_factor, TrendDirection.UP)

        if close > self.value:
            return TrendState(long_stop, TrendDirection.UP)
        target = min(short_stop, self.value)
        return TrendState(self.value - (self.value - target) * step_factor, TrendDirection.DOWN)


def moneyline_states(
    data: pd.DataFrame,
    period: int = MONEYLINE_PERIOD,
    mult: float = MONEYLINE_MULT,
    step_factor: float = MONEYLINE_STEP,
) -> List[Optional[TrendState]]:
    """
    Run the trend state machine over the whole series.

    Bars before the ATR warm-up hold None. The first defined bar starts
    from (close, UP).
    """
    atr = calculate_atr(data, period).to_numpy()
    closes = data['Close'].to_numpy(dtype=float)
    states: List[Optional[TrendState]] = []
    state: Optional[TrendState] = None
    for close, current_atr in zip(closes, atr):
        if np.isnan(current_atr):
            states.append(None)
            continue
        if state is None:
            state = TrendState(close, TrendDirection.UP)
        state = state.advance(close, current_atr, mult, step_factor)
        states.append(state)
    return states


def calculate_moneyline(
    data: pd.DataFrame,
    period: int = MONEYLINE_PERIOD,
    mult: float = MONEYLINE_MULT,
    step_factor: float = MONEYLINE_STEP,
) -> pd.DataFrame:
    """
    Calculate the Moneyline trend line.

    Args:
        data: DataFrame with High/Low/Close columns
        period: ATR period (default: 14)
        mult: ATR multiplier for the stop distance (default: 3.0)
        step_factor: Fraction of the gap to the stop closed per bar (default: 0.6)

    Returns:
        DataFrame with columns value (float, NaN during warm-up) and
        direction (TrendDirection, None during warm-up)
    """
    states = moneyline_states(data, period, mult, step_factor)
    return pd.DataFrame(
        {
            'value': pd.Series([np.nan if s is None else s.value for s in states], index=data.index, dtype=float),
            'direction': pd.Series([None if s is None else s.direction for s in states], index=data.index, dtype=object),
        },
        index=data.index,
    )


def moneyline_flips(moneyline: pd.DataFrame) -> List[Tuple[Any, TrendDirection]]:
    """
    Bars where the trend direction changes, as (time, new direction).

    Only transitions between two defined bars count.
    """
    flips: List[Tuple[Any, TrendDirection]] = []
    prev: Optional[TrendDirection] = None
    for time, direction in moneyline['direction'].items():
        if direction is not None and prev is not None and direction is not prev:
            flips.append((time, direction))
        prev = direction
    return flips
