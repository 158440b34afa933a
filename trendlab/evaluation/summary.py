"""
Summary aggregator: trade ledger + price series -> scalar statistics.
"""
from __future__ import annotations

from typing import List

import pandas as pd

from .types import BacktestSummary, Trade


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _median(values: List[float]) -> float:
    """Sorted midpoint; even counts average the two central values."""
    if not values:
        return 0.0
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def calculate_summary(trades: List[Trade], data: pd.DataFrame) -> BacktestSummary:
    """
    Reduce a trade ledger to performance statistics.

    Open and closed trades are both counted. A trade with result >= 1 is a
    win. max_gain / max_loss include 0, so they never cross zero. An empty
    ledger yields the neutral summary (ratios and averages 0, compounding
    results 1).

    Args:
        trades: Trade ledger
        data: Price series the ledger was simulated on (for hold_result)

    Returns:
        BacktestSummary
    """
    if not trades:
        return BacktestSummary()

    returns = [t.return_pct for t in trades]
    win_returns = [t.return_pct for t in trades if t.result >= 1]
    loss_returns = [t.return_pct for t in trades if t.result < 1]

    cumulative = 1.0
    for t in trades:
        cumulative *= t.result

    hold_result = float(data['Close'].iloc[-1] / data['Open'].iloc[0]) if len(data) else 1.0

    return BacktestSummary(
        total_trades=len(trades),
        win_ratio=len(win_returns) / len(trades) * 100,
        average_result=_mean(returns),
        median_result=_median(returns),
        cumulative_result=cumulative,
        hold_result=hold_result,
        average_duration=_mean([float(t.duration) for t in trades]),
        win_trades=len(win_returns),
        loss_trades=len(loss_returns),
        max_gain=max(returns + [0.0]),
        max_loss=min(returns + [0.0]),
        profitable_mean=_mean(win_returns),
        profitable_median=_median(win_returns),
        losing_mean=_mean(loss_returns),
        losing_median=_median(loss_returns),
    )
