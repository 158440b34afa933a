"""
Moving averages: simple, exponential and Wilder-smoothed (SMMA).

All functions return a float Series aligned with the input. Positions
before the warm-up completes hold NaN.
"""
import numpy as np
import pandas as pd


def _first_valid_position(values: np.ndarray) -> int:
    """Position of the first non-NaN value, or -1 if there is none."""
    valid = np.flatnonzero(~np.isnan(values))
    return int(valid[0]) if len(valid) else -1


def calculate_sma(values: pd.Series, period: int) -> pd.Series:
    """Simple moving average over a trailing window of `period` values."""
    return values.astype(float).rolling(period, min_periods=period).mean()


def calculate_ema(values: pd.Series, period: int) -> pd.Series:
    """
    Calculate Exponential Moving Average.

    Seeded with the simple average of the first `period` defined values,
    placed at the last of them; thereafter ema = (x - ema) * k + ema with
    k = 2 / (period + 1). A NaN input after the seed yields NaN at that
    position without resetting the running average, so a NaN-prefixed
    input (e.g. a MACD line) is handled correctly.
    """
    arr = values.to_numpy(dtype=float)
    out = np.full(len(arr), np.nan)
    start = _first_valid_position(arr)
    if start < 0 or len(arr) - start < period:
        return pd.Series(out, index=values.index)

    ema = arr[start:start + period].mean()
    out[start + period - 1] = ema
    k = 2.0 / (period + 1)
    for i in range(start + period, len(arr)):
        if np.isnan(arr[i]):
            continue
        ema = (arr[i] - ema) * k + ema
        out[i] = ema
    return pd.Series(out, index=values.index)


def calculate_smma(values: pd.Series, period: int) -> pd.Series:
    """
    Calculate Wilder-smoothed moving average (SMMA / RMA).

    Seeded like the EMA; thereafter smma = (smma * (period - 1) + x) / period.
    """
    arr = values.to_numpy(dtype=float)
    out = np.full(len(arr), np.nan)
    start = _first_valid_position(arr)
    if start < 0 or len(arr) - start < period:
        return pd.Series(out, index=values.index)

    smma = arr[start:start + period].mean()
    out[start + period - 1] = smma
    for i in range(start + period, len(arr)):
        if np.isnan(arr[i]):
            continue
        smma = (smma * (period - 1) + arr[i]) / period
        out[i] = smma
    return pd.Series(out, index=values.index)
