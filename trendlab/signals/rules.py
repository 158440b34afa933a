"""
Signal rules, one per strategy family.

A rule computes the indicator frame its strategy needs and maps each bar
(with the previous bar, for transitions) to a discrete SignalType. New
strategies can be added without changing the generator.
"""
import math
from typing import Any, Dict, Mapping, Protocol

import pandas as pd

from ..indicators.calculator import TechnicalIndicators
from ..shared.types import AlignmentState, SignalType, StrategyType, TrendDirection


def _defined(value: Any) -> bool:
    return value is not None and not (isinstance(value, float) and math.isnan(value))


class SignalRule(Protocol):
    """Protocol for a strategy rule: indicator frame plus per-bar evaluation."""

    name: str

    def calculate(self, data: pd.DataFrame, calculator: TechnicalIndicators) -> pd.DataFrame:
        """Indicator columns the rule reads, aligned with data."""
        ...

    def evaluate(
        self,
        row: Mapping[str, Any],
        prev_row: Mapping[str, Any],
        params: Any,
    ) -> SignalType:
        """
        Evaluate rule at this bar.

        Args:
            row: Current indicator row
            prev_row: Previous row (for crossings and transitions)
            params: BacktestParams

        Returns:
            ENTER, EXIT or NONE
        """
        ...


class RsiThresholdRule:
    """Enter when RSI crosses below the buy level, exit when it crosses above the sell level."""

    name = "rsi"

    def calculate(self, data: pd.DataFrame, calculator: TechnicalIndicators) -> pd.DataFrame:
        return pd.DataFrame({"rsi": calculator.calculate_rsi(data['Close'])}, index=data.index)

    def evaluate(
        self,
        row: Mapping[str, Any],
        prev_row: Mapping[str, Any],
        params: Any,
    ) -> SignalType:
        rsi = row.get("rsi")
        if not _defined(rsi):
            return SignalType.NONE
        prev = prev_row.get("rsi")
        # An undefined previous value counts as being on the other side of the level.
        # Exit wins when both levels are crossed on the same bar.
        if rsi > params.rsi_sell and not (_defined(prev) and prev > params.rsi_sell):
            return SignalType.EXIT
        if rsi < params.rsi_buy and not (_defined(prev) and prev < params.rsi_buy):
            return SignalType.ENTER
        return SignalType.NONE


class AlignmentTransitionRule:
    """Enter on the bar the Goldhand state turns into the buy state, exit on the sell state."""

    name = "goldhand"

    def calculate(self, data: pd.DataFrame, calculator: TechnicalIndicators) -> pd.DataFrame:
        return calculator.calculate_goldhand(data)

    def evaluate(
        self,
        row: Mapping[str, Any],
        prev_row: Mapping[str, Any],
        params: Any,
    ) -> SignalType:
        # Warm-up bars read as neutral
        state = row.get("state") or AlignmentState.NEUTRAL
        prev_state = prev_row.get("state") or AlignmentState.NEUTRAL
        if state is params.goldhand_sell_state and prev_state is not params.goldhand_sell_state:
            return SignalType.EXIT
        if state is params.goldhand_buy_state and prev_state is not params.goldhand_buy_state:
            return SignalType.ENTER
        return SignalType.NONE


class TrendFlipRule:
    """Enter on a Moneyline down-to-up flip, exit on an up-to-down flip."""

    name = "moneyline"

    def calculate(self, data: pd.DataFrame, calculator: TechnicalIndicators) -> pd.DataFrame:
        return calculator.calculate_moneyline(data)

    def evaluate(
        self,
        row: Mapping[str, Any],
        prev_row: Mapping[str, Any],
        params: Any,
    ) -> SignalType:
        direction = row.get("direction")
        prev_direction = prev_row.get("direction")
        if direction is None or prev_direction is None:
            return SignalType.NONE
        if prev_direction is TrendDirection.DOWN and direction is TrendDirection.UP:
            return SignalType.ENTER
        if prev_direction is TrendDirection.UP and direction is TrendDirection.DOWN:
            return SignalType.EXIT
        return SignalType.NONE


_RULES: Dict[StrategyType, SignalRule] = {
    StrategyType.RSI: RsiThresholdRule(),
    StrategyType.GOLDHAND: AlignmentTransitionRule(),
    StrategyType.MONEYLINE: TrendFlipRule(),
}


def get_rule(strategy: StrategyType) -> SignalRule:
    """Return the rule for a strategy family."""
    return _RULES[StrategyType.parse(strategy)]
