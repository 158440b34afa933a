"""
Signal generator: strategy selection + parameters -> per-bar signals.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

import pandas as pd

from .config import BacktestParams
from .rules import get_rule
from ..indicators.calculator import TechnicalIndicators
from ..shared.types import SignalType, StrategyType

logger = logging.getLogger(__name__)


@dataclass
class SignalResult:
    """Per-bar signals plus the indicator outputs that produced them."""
    signals: pd.Series
    indicators: Dict[str, pd.DataFrame] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return len(self.signals) == 0

    def count(self, signal_type: SignalType) -> int:
        return int(sum(1 for s in self.signals if s is signal_type))


def empty_signal_result() -> SignalResult:
    return SignalResult(signals=pd.Series([], dtype=object), indicators={})


def generate_signals(
    data: pd.DataFrame,
    strategy: Union[StrategyType, str],
    params: Optional[BacktestParams] = None,
) -> SignalResult:
    """
    Generate per-bar signals for one strategy family.

    The first bar never carries a signal (there is no previous bar to
    compare against). Series shorter than params.min_bars yield an empty
    result with no signals and no indicators.

    Args:
        data: Price series frame (Open/High/Low/Close)
        strategy: Strategy family or tag
        params: Strategy parameters (defaults when None)

    Returns:
        SignalResult with a SignalType Series aligned with data
    """
    params = params or BacktestParams()
    strategy = StrategyType.parse(strategy)

    if len(data) < params.min_bars:
        logger.info(
            f"Series has {len(data)} bars, below the minimum of {params.min_bars}; no signals generated"
        )
        return empty_signal_result()

    rule = get_rule(strategy)
    frame = rule.calculate(data, TechnicalIndicators.from_params(params))

    rows = frame.to_dict('records')
    signals = [SignalType.NONE]
    for prev_row, row in zip(rows, rows[1:]):
        signals.append(rule.evaluate(row, prev_row, params))

    result = SignalResult(
        signals=pd.Series(signals, index=data.index, dtype=object),
        indicators={rule.name: frame},
    )
    logger.debug(
        f"{strategy.value}: {result.count(SignalType.ENTER)} enter / "
        f"{result.count(SignalType.EXIT)} exit signals over {len(data)} bars"
    )
    return result
