"""
Indicator calculation module.

Provides all trading indicators:
- Moving averages (SMA, EMA, Wilder-smoothed SMMA)
- Technical indicators (RSI, true range, ATR, MACD)
- Goldhand trend alignment
- Moneyline trailing-trend line

Every indicator returns output aligned 1:1 with the input series.
"""
from .moving_averages import calculate_sma, calculate_ema, calculate_smma
from .technical import calculate_rsi, calculate_true_range, calculate_atr, calculate_macd
from .goldhand import calculate_goldhand, classify_alignment
from .moneyline import TrendState, calculate_moneyline, moneyline_states, moneyline_flips
from .calculator import TechnicalIndicators

__all__ = [
    'calculate_sma',
    'calculate_ema',
    'calculate_smma',
    'calculate_rsi',
    'calculate_true_range',
    'calculate_atr',
    'calculate_macd',
    'calculate_goldhand',
    'classify_alignment',
    'TrendState',
    'calculate_moneyline',
    'moneyline_states',
    'moneyline_flips',
    'TechnicalIndicators',
]
