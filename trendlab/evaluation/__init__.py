"""
Backtest evaluation module.

Replays strategy signals into a trade ledger (next-bar execution, one
position at a time) and reduces the ledger to summary statistics.
"""
from .types import Trade, BacktestSummary
from .simulator import TradeSimulator, simulate_trades, ledger_to_frame
from .summary import calculate_summary

__all__ = [
    'Trade',
    'BacktestSummary',
    'TradeSimulator',
    'simulate_trades',
    'ledger_to_frame',
    'calculate_summary',
]
