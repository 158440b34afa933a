"""
Centralized default values for indicator and strategy parameters.

This is the SINGLE SOURCE OF TRUTH for all parameter defaults.
All modules should import from here to ensure consistency.
"""

# Minimum number of bars before any strategy is evaluated.
# Shorter series produce an empty result (no signals, no indicators).
MIN_BARS = 30

# RSI (Relative Strength Index) defaults
RSI_PERIOD = 14
RSI_BUY_LEVEL = 30  # Enter when RSI crosses below this level
RSI_SELL_LEVEL = 70  # Exit when RSI crosses above this level

# MACD (Moving Average Convergence Divergence) defaults
MACD_FAST = 12
MACD_SLOW = 26
MACD_SIGNAL = 9

# ATR (Average True Range) default period
ATR_PERIOD = 14

# Goldhand alignment: four SMMAs of (high + low) / 2, shortest first
GOLDHAND_PERIODS = (15, 19, 25, 29)
GOLDHAND_BUY_STATE = "bullish"
GOLDHAND_SELL_STATE = "bearish"

# Moneyline (ATR trailing-trend line) defaults
MONEYLINE_PERIOD = 14  # ATR period
MONEYLINE_MULT = 3.0  # ATR multiplier for the stop distance
MONEYLINE_STEP = 0.6  # Fraction of the gap closed per bar

# Chart overlay moving averages
SMA_SHORT_PERIOD = 50
SMA_LONG_PERIOD = 200
