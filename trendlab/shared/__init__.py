"""
Shared types and defaults for the backtesting engine.

This module provides:
- SignalType, StrategyType, AlignmentState, TrendDirection, TradeStatus enums
- Centralized default values for all indicator parameters
"""
from .types import SignalType, StrategyType, AlignmentState, TrendDirection, TradeStatus
from .defaults import (
    MIN_BARS,
    RSI_PERIOD, RSI_BUY_LEVEL, RSI_SELL_LEVEL,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
    ATR_PERIOD,
    GOLDHAND_PERIODS, GOLDHAND_BUY_STATE, GOLDHAND_SELL_STATE,
    MONEYLINE_PERIOD, MONEYLINE_MULT, MONEYLINE_STEP,
    SMA_SHORT_PERIOD, SMA_LONG_PERIOD,
)

__all__ = [
    'SignalType',
    'StrategyType',
    'AlignmentState',
    'TrendDirection',
    'TradeStatus',
    'MIN_BARS',
    'RSI_PERIOD', 'RSI_BUY_LEVEL', 'RSI_SELL_LEVEL',
    'MACD_FAST', 'MACD_SLOW', 'MACD_SIGNAL',
    'ATR_PERIOD',
    'GOLDHAND_PERIODS', 'GOLDHAND_BUY_STATE', 'GOLDHAND_SELL_STATE',
    'MONEYLINE_PERIOD', 'MONEYLINE_MULT', 'MONEYLINE_STEP',
    'SMA_SHORT_PERIOD', 'SMA_LONG_PERIOD',
]
