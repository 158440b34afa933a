"""
Price series input contract.

Bars are normalized into a pandas OHLC frame that every indicator consumes.
"""
from .series import (
    Bar,
    SeriesFormatError,
    bars_to_frame,
    frame_to_bars,
    ensure_ohlc,
    as_price_frame,
)

__all__ = [
    'Bar',
    'SeriesFormatError',
    'bars_to_frame',
    'frame_to_bars',
    'ensure_ohlc',
    'as_price_frame',
]
