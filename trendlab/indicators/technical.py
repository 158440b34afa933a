"""
Technical indicators: RSI, true range, ATR and MACD.

Each function is a pure transform from a price series to one or more
float Series aligned with it; undefined (warm-up) positions hold NaN.
"""
from typing import Tuple

import numpy as np
import pandas as pd

from .moving_averages import calculate_ema, calculate_smma
from ..shared.defaults import RSI_PERIOD, ATR_PERIOD, MACD_FAST, MACD_SLOW, MACD_SIGNAL


def _rsi_value(avg_gain: float, avg_loss: float, saturate_zero_loss: bool) -> float:
    if avg_loss == 0:
        if saturate_zero_loss:
            return 100.0
        # Zero average loss is divided as 1
        return 100.0 - 100.0 / (1.0 + avg_gain)
    return 100.0 - 100.0 / (1.0 + avg_gain / avg_loss)


def calculate_rsi(
    prices: pd.Series,
    period: int = RSI_PERIOD,
    saturate_zero_loss: bool = False,
) -> pd.Series:
    """
    Calculate Relative Strength Index (RSI).

    RSI = 100 - (100 / (1 + RS))
    RS = Average Gain / Average Loss

    Averages start as the simple mean of the first `period` close-to-close
    changes (first value at position `period`) and are Wilder-smoothed
    afterwards. A zero average loss is replaced by 1 in the ratio; with
    saturate_zero_loss=True the RSI is reported as 100 instead.

    Args:
        prices: Close prices
        period: Lookback period (default: 14)
        saturate_zero_loss: Report 100 when the average loss is zero

    Returns:
        Series with RSI values (NaN before position `period`)
    """
    closes = prices.to_numpy(dtype=float)
    out = np.full(len(closes), np.nan)
    if len(closes) <= period:
        return pd.Series(out, index=prices.index)

    delta = np.diff(closes)
    gains = np.where(delta > 0, delta, 0.0)
    losses = np.where(delta < 0, -delta, 0.0)

    avg_gain = gains[:period].sum() / period
    avg_loss = losses[:period].sum() / period
    out[period] = _rsi_value(avg_gain, avg_loss, saturate_zero_loss)

    for i in range(period + 1, len(closes)):
        avg_gain = (avg_gain * (period - 1) + gains[i - 1]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i - 1]) / period
        out[i] = _rsi_value(avg_gain, avg_loss, saturate_zero_loss)

    return pd.Series(out, index=prices.index)


def calculate_true_range(data: pd.DataFrame) -> pd.Series:
    """
    True range per bar: max(high - low, |high - prev close|, |low - prev close|).

    The first bar has no previous close, so its true range is high - low.
    """
    high, low, close = data['High'], data['Low'], data['Close']
    prev_close = close.shift(1)
    tr1 = high - low
    tr2 = (high - prev_close).abs()
    tr3 = (low - prev_close).abs()
    return pd.concat([tr1, tr2, tr3], axis=1).max(axis=1).astype(float)


def calculate_atr(data: pd.DataFrame, period: int = ATR_PERIOD) -> pd.Series:
    """
    Calculate ATR (Average True Range) with Wilder smoothing.

    The seed is the simple average of the true ranges of bars 1..period
    (the first bar has no previous close and is left out), placed at
    position `period`.

    Args:
        data: DataFrame with High/Low/Close columns
        period: ATR period (default: 14)

    Returns:
        Series of ATR values (NaN before position `period`)
    """
    if len(data) == 0:
        return pd.Series(dtype=float, index=data.index)
    tr = calculate_true_range(data)
    smoothed = calculate_smma(tr.iloc[1:].reset_index(drop=True), period).to_numpy()
    return pd.Series(np.concatenate([[np.nan], smoothed]), index=data.index)


def calculate_macd(
    prices: pd.Series,
    fast: int = MACD_FAST,
    slow: int = MACD_SLOW,
    signal: int = MACD_SIGNAL,
) -> Tuple[pd.Series, pd.Series, pd.Series]:
    """
    Calculate MACD (Moving Average Convergence Divergence).

    The signal line is an EMA of the MACD line seeded at the line's first
    defined position. Each output is NaN wherever an operand is NaN.

    Returns:
        Tuple of (MACD line, Signal line, Histogram)
    """
    ema_fast = calculate_ema(prices, fast)
    ema_slow = calculate_ema(prices, slow)

    macd_line = ema_fast - ema_slow
    signal_line = calculate_ema(macd_line, signal)
    histogram = macd_line - signal_line

    return macd_line, signal_line, histogram
