"""
Trade ledger and summary types.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

import pandas as pd

from ..shared.types import TradeStatus


def _serialize_time(value: Any) -> Any:
    if isinstance(value, pd.Timestamp):
        return value.isoformat()
    return value


@dataclass
class Trade:
    """A single long trade: entered and exited at the next bar's open."""
    entry_time: Any
    entry_price: float
    entry_index: int  # Bar position of the entry

    # Filled when the trade closes
    exit_time: Optional[Any] = None
    exit_price: Optional[float] = None
    exit_index: Optional[int] = None

    result: float = 1.0  # exit_price / entry_price, or last close / entry_price while open
    duration: int = 0  # Calendar days for datetime bars, else bar count
    status: TradeStatus = TradeStatus.OPEN

    @property
    def return_pct(self) -> float:
        return (self.result - 1) * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entry_time": _serialize_time(self.entry_time),
            "entry_price": self.entry_price,
            "exit_time": _serialize_time(self.exit_time),
            "exit_price": self.exit_price,
            "result": self.result,
            "duration": self.duration,
            "status": self.status.value,
        }


@dataclass
class BacktestSummary:
    """Scalar statistics over a trade ledger. Percentages are (result - 1) * 100."""
    total_trades: int = 0
    win_ratio: float = 0.0  # % of trades with result >= 1
    average_result: float = 0.0
    median_result: float = 0.0
    cumulative_result: float = 1.0  # Product of all results
    hold_result: float = 1.0  # Last close / first open
    average_duration: float = 0.0
    win_trades: int = 0
    loss_trades: int = 0
    max_gain: float = 0.0
    max_loss: float = 0.0
    profitable_mean: float = 0.0
    profitable_median: float = 0.0
    losing_mean: float = 0.0
    losing_median: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
