"""
Shared types for the backtesting engine.

This module consolidates the enums used across indicators, signal
generation and trade simulation so every stage compares against the
same values.
"""
from enum import Enum
from typing import Union


class SignalType(Enum):
    """Per-bar discrete trading signal."""
    ENTER = "enter"
    EXIT = "exit"
    NONE = "none"


class TrendDirection(Enum):
    """Direction of the Moneyline trailing-trend line."""
    UP = 1
    DOWN = -1


class TradeStatus(Enum):
    """Status of a simulated trade."""
    OPEN = "open"
    CLOSED = "closed"


class AlignmentState(Enum):
    """Goldhand alignment of the four smoothed averages."""
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"

    @classmethod
    def parse(cls, value: Union["AlignmentState", str]) -> "AlignmentState":
        """
        Coerce a state name or one of the dashboard's colour names.

        gold -> bullish, blue -> bearish, silver/grey/gray -> neutral.

        Raises:
            ValueError: If the value names no known state
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        key = _ALIGNMENT_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown alignment state: {value!r}") from None


_ALIGNMENT_ALIASES = {
    "gold": "bullish",
    "blue": "bearish",
    "silver": "neutral",
    "grey": "neutral",
    "gray": "neutral",
}


class StrategyType(Enum):
    """Strategy family driving the signal generator."""
    RSI = "rsi"  # Momentum
    GOLDHAND = "goldhand"  # Alignment
    MONEYLINE = "moneyline"  # Trend-line

    @classmethod
    def parse(cls, value: Union["StrategyType", str]) -> "StrategyType":
        """
        Coerce a strategy tag (case-insensitive), accepting role names too.

        Raises:
            ValueError: If the tag names no known strategy
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_")
        key = _STRATEGY_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown strategy: {value!r}") from None


_STRATEGY_ALIASES = {
    "momentum": "rsi",
    "alignment": "goldhand",
    "trend_line": "moneyline",
    "trendline": "moneyline",
}
