"""
Price series contract.

A price series is a pandas DataFrame with Open/High/Low/Close (and optional
Volume) columns, one row per bar, indexed by bar time in ascending order.
Ordering and finiteness are preconditions: they are not checked here.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Union

import pandas as pd

OHLC_COLUMNS = ["Open", "High", "Low", "Close"]
VOLUME_COLUMN = "Volume"


class SeriesFormatError(ValueError):
    """Raised when bar input is structurally malformed (missing fields or columns)."""
    pass


@dataclass(frozen=True)
class Bar:
    """One OHLC(V) sample for a fixed time period."""
    time: Any
    open: float
    high: float
    low: float
    close: float
    volume: Optional[float] = None


BarLike = Union[Bar, Mapping[str, Any]]


def _bar_from_mapping(raw: Mapping[str, Any], position: int) -> Bar:
    missing = [k for k in ("time", "open", "high", "low", "close") if k not in raw]
    if missing:
        raise SeriesFormatError(f"Bar {position} is missing fields: {', '.join(missing)}")
    return Bar(
        time=raw["time"],
        open=float(raw["open"]),
        high=float(raw["high"]),
        low=float(raw["low"]),
        close=float(raw["close"]),
        volume=None if raw.get("volume") is None else float(raw["volume"]),
    )


def _normalize_index(times: List[Any]) -> pd.Index:
    """Parse string time keys (ISO dates) to timestamps; keep other keys as given."""
    if times and all(isinstance(t, str) for t in times):
        return pd.DatetimeIndex(pd.to_datetime(times), name="time")
    return pd.Index(times, name="time")


def bars_to_frame(bars: Iterable[BarLike]) -> pd.DataFrame:
    """
    Convert a sequence of bars to the price series frame.

    Args:
        bars: Bar objects or mappings with time/open/high/low/close[/volume] keys

    Returns:
        DataFrame with Open/High/Low/Close columns (plus Volume when every bar has one)

    Raises:
        SeriesFormatError: If a bar is missing a required field
    """
    rows: List[Bar] = []
    for i, raw in enumerate(bars):
        rows.append(raw if isinstance(raw, Bar) else _bar_from_mapping(raw, i))

    index = _normalize_index([b.time for b in rows])
    frame = pd.DataFrame(
        {
            "Open": [b.open for b in rows],
            "High": [b.high for b in rows],
            "Low": [b.low for b in rows],
            "Close": [b.close for b in rows],
        },
        index=index,
        dtype=float,
    )
    if rows and all(b.volume is not None for b in rows):
        frame[VOLUME_COLUMN] = [b.volume for b in rows]
    return frame


def frame_to_bars(frame: pd.DataFrame) -> List[Bar]:
    """Convert a price series frame back to Bar objects."""
    ensure_ohlc(frame)
    has_volume = VOLUME_COLUMN in frame.columns
    bars = []
    for time, row in frame.iterrows():
        bars.append(Bar(
            time=time,
            open=float(row["Open"]),
            high=float(row["High"]),
            low=float(row["Low"]),
            close=float(row["Close"]),
            volume=float(row[VOLUME_COLUMN]) if has_volume and not pd.isna(row[VOLUME_COLUMN]) else None,
        ))
    return bars


def ensure_ohlc(frame: pd.DataFrame) -> pd.DataFrame:
    """
    Check that the frame carries the OHLC columns.

    Raises:
        SeriesFormatError: If any of Open/High/Low/Close is missing
    """
    missing = [c for c in OHLC_COLUMNS if c not in frame.columns]
    if missing:
        raise SeriesFormatError(f"Price series is missing columns: {', '.join(missing)}")
    return frame


def as_price_frame(data: Union[pd.DataFrame, Iterable[BarLike]]) -> pd.DataFrame:
    """
    Accept either a price series frame or a sequence of bars.

    A frame indexed by ISO date strings is returned as a copy with a
    parsed DatetimeIndex, the same index bars_to_frame builds.
    """
    if isinstance(data, pd.DataFrame):
        ensure_ohlc(data)
        if len(data) and all(isinstance(t, str) for t in data.index):
            data = data.copy()
            data.index = _normalize_index(list(data.index))
        return data
    return bars_to_frame(data)
