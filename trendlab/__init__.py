"""
Technical-indicator and backtesting engine.

Provides unified interfaces for:
- Price series normalization (bars to a pandas OHLC frame)
- Indicator calculations (SMA, EMA, SMMA, RSI, ATR, MACD, Goldhand, Moneyline)
- Signal generation (one strategy family at a time)
- Trade simulation with next-bar execution
- Summary statistics over the trade ledger
"""
from .engine import BacktestResult, run_backtest

__all__ = [
    'BacktestResult',
    'run_backtest',
]
