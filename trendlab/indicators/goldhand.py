"""
Goldhand trend-alignment indicator.

Four Wilder-smoothed averages of the bar midpoint (high + low) / 2 with
ascending periods. The alignment is bullish when the averages are in
strictly descending order (fastest on top), bearish when strictly
ascending, and neutral otherwise.
"""
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from .moving_averages import calculate_smma
from ..shared.defaults import GOLDHAND_PERIODS
from ..shared.types import AlignmentState

LINE_COLUMNS = ["v1", "v2", "v3", "v4"]


def classify_alignment(v1: float, v2: float, v3: float, v4: float) -> Optional[AlignmentState]:
    """Alignment of four averages; None while any of them is undefined."""
    if any(np.isnan(v) for v in (v1, v2, v3, v4)):
        return None
    if v1 > v2 > v3 > v4:
        return AlignmentState.BULLISH
    if v1 < v2 < v3 < v4:
        return AlignmentState.BEARISH
    return AlignmentState.NEUTRAL


def calculate_goldhand(
    data: pd.DataFrame,
    periods: Sequence[int] = GOLDHAND_PERIODS,
) -> pd.DataFrame:
    """
    Calculate the four Goldhand lines and the alignment state per bar.

    Args:
        data: DataFrame with High/Low columns
        periods: Four SMMA periods, shortest first (default: 15, 19, 25, 29)

    Returns:
        DataFrame with columns v1..v4 (float, NaN during warm-up) and
        state (AlignmentState, None until all four lines are defined)
    """
    if len(periods) != 4:
        raise ValueError(f"Goldhand needs exactly four periods, got {len(periods)}")
    hl2 = (data['High'] + data['Low']) / 2
    lines = pd.DataFrame(
        {col: calculate_smma(hl2, p) for col, p in zip(LINE_COLUMNS, periods)},
        index=data.index,
    )
    values = lines.to_numpy(dtype=float)
    states = [classify_alignment(*row) for row in values]
    lines['state'] = pd.Series(states, index=data.index, dtype=object)
    return lines
