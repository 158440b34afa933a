"""
Indicator calculator shared by the chart overlays and the backtester.

TechnicalIndicators bundles the parameters of every indicator so the
charting path and the signal generator compute identical values.
"""
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Optional, Sequence, Tuple

import pandas as pd

from .moving_averages import calculate_sma
from .technical import calculate_rsi, calculate_atr, calculate_macd
from .goldhand import calculate_goldhand
from .moneyline import calculate_moneyline
from ..shared.defaults import (
    RSI_PERIOD, ATR_PERIOD,
    MACD_FAST, MACD_SLOW, MACD_SIGNAL,
    GOLDHAND_PERIODS,
    MONEYLINE_PERIOD, MONEYLINE_MULT, MONEYLINE_STEP,
    SMA_SHORT_PERIOD, SMA_LONG_PERIOD,
)

Block = Tuple[str, Dict[str, pd.Series], float]


class TechnicalIndicators:
    """Calculates technical indicators from a price series frame."""

    def __init__(
        self,
        rsi_period: int = RSI_PERIOD,
        rsi_saturate_zero_loss: bool = False,
        atr_period: int = ATR_PERIOD,
        macd_fast: int = MACD_FAST,
        macd_slow: int = MACD_SLOW,
        macd_signal: int = MACD_SIGNAL,
        goldhand_periods: Sequence[int] = GOLDHAND_PERIODS,
        moneyline_period: int = MONEYLINE_PERIOD,
        moneyline_mult: float = MONEYLINE_MULT,
        moneyline_step: float = MONEYLINE_STEP,
        sma_short_period: int = SMA_SHORT_PERIOD,
        sma_long_period: int = SMA_LONG_PERIOD,
    ):
        self.rsi_period = rsi_period
        self.rsi_saturate_zero_loss = rsi_saturate_zero_loss
        self.atr_period = atr_period
        self.macd_fast = macd_fast
        self.macd_slow = macd_slow
        self.macd_signal = macd_signal
        self.goldhand_periods = tuple(goldhand_periods)
        self.moneyline_period = moneyline_period
        self.moneyline_mult = moneyline_mult
        self.moneyline_step = moneyline_step
        self.sma_short_period = sma_short_period
        self.sma_long_period = sma_long_period

    @classmethod
    def from_params(cls, params) -> "TechnicalIndicators":
        """Build a calculator from a BacktestParams record."""
        return cls(
            rsi_period=params.rsi_period,
            rsi_saturate_zero_loss=params.rsi_saturate_zero_loss,
            goldhand_periods=params.goldhand_periods,
            moneyline_period=params.moneyline_period,
            moneyline_mult=params.moneyline_mult,
            moneyline_step=params.moneyline_step,
        )

    def calculate_rsi(self, prices: pd.Series) -> pd.Series:
        return calculate_rsi(prices, self.rsi_period, self.rsi_saturate_zero_loss)

    def calculate_atr(self, data: pd.DataFrame) -> pd.Series:
        return calculate_atr(data, self.atr_period)

    def calculate_macd(self, prices: pd.Series) -> Tuple[pd.Series, pd.Series, pd.Series]:
        return calculate_macd(prices, self.macd_fast, self.macd_slow, self.macd_signal)

    def calculate_goldhand(self, data: pd.DataFrame) -> pd.DataFrame:
        return calculate_goldhand(data, self.goldhand_periods)

    def calculate_moneyline(self, data: pd.DataFrame) -> pd.DataFrame:
        return calculate_moneyline(data, self.moneyline_period, self.moneyline_mult, self.moneyline_step)

    def _compute_sma_block(self, data: pd.DataFrame) -> Block:
        """Compute SMA block; returns (timing_key, {col: series}, elapsed)."""
        t0 = time.perf_counter()
        prices = data['Close']
        cols = {
            "sma_short": calculate_sma(prices, self.sma_short_period),
            "sma_long": calculate_sma(prices, self.sma_long_period),
        }
        return "indicator_sma", cols, time.perf_counter() - t0

    def _compute_rsi_block(self, data: pd.DataFrame) -> Block:
        """Compute RSI block; returns (timing_key, {col: series}, elapsed)."""
        t0 = time.perf_counter()
        cols = {"rsi": self.calculate_rsi(data['Close'])}
        return "indicator_rsi", cols, time.perf_counter() - t0

    def _compute_macd_block(self, data: pd.DataFrame) -> Block:
        """Compute MACD block; returns (timing_key, {col: series}, elapsed)."""
        t0 = time.perf_counter()
        macd_line, signal_line, histogram = self.calculate_macd(data['Close'])
        cols = {
            "macd_line": macd_line,
            "macd_signal": signal_line,
            "macd_histogram": histogram,
        }
        return "indicator_macd", cols, time.perf_counter() - t0

    def _compute_atr_block(self, data: pd.DataFrame) -> Block:
        """Compute ATR block; returns (timing_key, {col: series}, elapsed)."""
        t0 = time.perf_counter()
        cols = {"atr": self.calculate_atr(data)}
        return "indicator_atr", cols, time.perf_counter() - t0

    def _compute_goldhand_block(self, data: pd.DataFrame) -> Block:
        """Compute Goldhand block; returns (timing_key, {col: series}, elapsed)."""
        t0 = time.perf_counter()
        gh = self.calculate_goldhand(data)
        cols = {f"goldhand_{col}": gh[col] for col in gh.columns}
        return "indicator_goldhand", cols, time.perf_counter() - t0

    def _compute_moneyline_block(self, data: pd.DataFrame) -> Block:
        """Compute Moneyline block; returns (timing_key, {col: series}, elapsed)."""
        t0 = time.perf_counter()
        ml = self.calculate_moneyline(data)
        cols = {f"moneyline_{col}": ml[col] for col in ml.columns}
        return "indicator_moneyline", cols, time.perf_counter() - t0

    def calculate_all(
        self,
        data: pd.DataFrame,
        timings: Optional[Dict[str, float]] = None,
        max_workers: Optional[int] = None,
    ) -> pd.DataFrame:
        """
        Calculate all chart indicators and return as DataFrame.

        SMA, RSI, MACD, ATR, Goldhand and Moneyline blocks are independent
        and are computed in parallel via ThreadPoolExecutor when
        max_workers > 1. Column order is fixed regardless of completion order.

        Args:
            data: DataFrame with Open/High/Low/Close columns
            timings: If provided, accumulate per-indicator elapsed seconds (keys: indicator_rsi, etc.)
            max_workers: Thread pool size (default: cpu_count); 1 = sequential.

        Returns:
            DataFrame with all indicator values, same index as data
        """
        def _acc(key: str, elapsed: float) -> None:
            if timings is not None:
                timings[key] = timings.get(key, 0.0) + elapsed

        blocks = [
            self._compute_sma_block,
            self._compute_rsi_block,
            self._compute_macd_block,
            self._compute_atr_block,
            self._compute_goldhand_block,
            self._compute_moneyline_block,
        ]
        workers = (
            max(1, max_workers)
            if max_workers is not None
            else (os.cpu_count() or 1)
        )

        results: Dict[str, Dict[str, pd.Series]] = {}
        if workers <= 1:
            for block in blocks:
                key, cols, elapsed = block(data)
                _acc(key, elapsed)
                results[key] = cols
        else:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [executor.submit(block, data) for block in blocks]
                for future in as_completed(futures):
                    key, cols, elapsed = future.result()
                    _acc(key, elapsed)
                    results[key] = cols

        df = pd.DataFrame(index=data.index)
        df["price"] = data['Close']
        for key in (
            "indicator_sma", "indicator_rsi", "indicator_macd",
            "indicator_atr", "indicator_goldhand", "indicator_moneyline",
        ):
            for col, values in results[key].items():
                df[col] = values
        return df
