"""
Trade simulator: replays per-bar signals into a trade ledger.

Two states, flat and in-position. A signal seen on bar i executes at bar
i + 1's open, so the final bar is never scanned for signals. A position
still held when the scan ends is reported as an open trade valued at the
last close.
"""
from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Any, List, Optional

import pandas as pd

from .types import Trade
from ..shared.types import SignalType, TradeStatus

logger = logging.getLogger(__name__)


def _elapsed(start_time: Any, end_time: Any, start_index: int, end_index: int) -> int:
    """Calendar days between datetime bars, rounded half up; bar count otherwise."""
    if isinstance(start_time, (datetime, date)) and isinstance(end_time, (datetime, date)):
        seconds = (pd.Timestamp(end_time) - pd.Timestamp(start_time)).total_seconds()
        return int(math.floor(seconds / 86400 + 0.5))
    return end_index - start_index


class TradeSimulator:
    """Single-position long-only simulator over one price series."""

    def __init__(self, data: pd.DataFrame):
        """
        Args:
            data: Price series frame (Open/Close are read)
        """
        self.data = data
        self._times = list(data.index)
        self._opens = data['Open'].to_numpy(dtype=float)
        self._closes = data['Close'].to_numpy(dtype=float)
        self._position: Optional[Trade] = None
        self.trades: List[Trade] = []

    @property
    def in_position(self) -> bool:
        return self._position is not None

    def _open(self, i: int) -> None:
        self._position = Trade(
            entry_time=self._times[i],
            entry_price=float(self._opens[i]),
            entry_index=i,
        )

    def _close(self, i: int) -> None:
        trade = self._position
        trade.exit_time = self._times[i]
        trade.exit_price = float(self._opens[i])
        trade.exit_index = i
        trade.result = trade.exit_price / trade.entry_price
        trade.duration = _elapsed(trade.entry_time, trade.exit_time, trade.entry_index, i)
        trade.status = TradeStatus.CLOSED
        self.trades.append(trade)
        self._position = None

    def _mark_open(self) -> None:
        last = len(self._times) - 1
        trade = self._position
        trade.result = float(self._closes[last]) / trade.entry_price
        trade.duration = _elapsed(trade.entry_time, self._times[last], trade.entry_index, last)
        self.trades.append(trade)
        self._position = None

    def run(self, signals: pd.Series) -> List[Trade]:
        """
        Replay signals over the series.

        Args:
            signals: SignalType per bar, aligned with the price series

        Returns:
            Trade ledger in chronological order

        Raises:
            ValueError: If signals and price series lengths differ
        """
        if len(signals) != len(self._times):
            raise ValueError(
                f"Signal series length ({len(signals)}) does not match price series length ({len(self._times)})"
            )
        self._position = None
        self.trades = []

        values = list(signals)
        for i in range(len(values) - 1):
            if self._position is None and values[i] is SignalType.ENTER:
                self._open(i + 1)
            elif self._position is not None and values[i] is SignalType.EXIT:
                self._close(i + 1)

        if self._position is not None:
            self._mark_open()

        logger.debug(f"Simulated {len(self.trades)} trades over {len(values)} bars")
        return self.trades


def simulate_trades(data: pd.DataFrame, signals: pd.Series) -> List[Trade]:
    """Run a TradeSimulator over data with the given signals."""
    return TradeSimulator(data).run(signals)


def ledger_to_frame(trades: List[Trade]) -> pd.DataFrame:
    """Trade ledger as a DataFrame (one row per trade, with return_pct)."""
    columns = [
        "entry_time", "entry_price", "exit_time", "exit_price",
        "result", "return_pct", "duration", "status",
    ]
    rows = [
        {
            "entry_time": t.entry_time,
            "entry_price": t.entry_price,
            "exit_time": t.exit_time,
            "exit_price": t.exit_price,
            "result": t.result,
            "return_pct": t.return_pct,
            "duration": t.duration,
            "status": t.status.value,
        }
        for t in trades
    ]
    return pd.DataFrame(rows, columns=columns)
