"""
Backtest pipeline: price series -> signals -> trade ledger -> summary.

Every stage is a pure function of its inputs. Re-running with different
parameters recomputes everything from scratch.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd

from .data.series import BarLike, as_price_frame
from .evaluation.simulator import simulate_trades
from .evaluation.summary import calculate_summary
from .evaluation.types import BacktestSummary, Trade
from .signals.config import BacktestParams, StrategyConfig
from .signals.generator import generate_signals
from .shared.types import StrategyType

logger = logging.getLogger(__name__)


def _serialize_value(value: Any) -> Any:
    """JSON-friendly cell: NaN/None -> None, enums -> their value."""
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    if isinstance(value, Enum):
        return value.value
    return float(value) if isinstance(value, float) else value


@dataclass
class BacktestResult:
    """Trade ledger, the indicator outputs behind it, and the summary."""
    strategy: StrategyType
    trades: List[Trade] = field(default_factory=list)
    indicators: Dict[str, pd.DataFrame] = field(default_factory=dict)
    summary: BacktestSummary = field(default_factory=BacktestSummary)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serializable form for downstream charting.

        Indicator frames become {column: [values]} with undefined positions as None.
        """
        indicators = {
            name: {col: [_serialize_value(v) for v in frame[col]] for col in frame.columns}
            for name, frame in self.indicators.items()
        }
        return {
            "trades": [t.to_dict() for t in self.trades],
            "indicators": indicators,
        }


def run_backtest(
    data: Union[pd.DataFrame, Iterable[BarLike]],
    strategy: Union[StrategyType, str, StrategyConfig],
    params: Optional[BacktestParams] = None,
) -> BacktestResult:
    """
    Run the full pipeline for one strategy over one price series.

    Args:
        data: Price series frame or a sequence of bars
        strategy: Strategy family/tag, or a StrategyConfig (its params are used
            unless params is given)
        params: Strategy parameters (defaults when None)

    Returns:
        BacktestResult; a series below the minimum length yields no trades,
        no indicators and the neutral summary
    """
    if isinstance(strategy, StrategyConfig):
        params = params or strategy.params
        strategy = strategy.strategy
    strategy = StrategyType.parse(strategy)
    params = params or BacktestParams()
    frame = as_price_frame(data)

    signal_result = generate_signals(frame, strategy, params)
    if signal_result.is_empty:
        return BacktestResult(strategy=strategy)

    trades = simulate_trades(frame, signal_result.signals)
    summary = calculate_summary(trades, frame)

    logger.debug(
        f"Backtest {strategy.value}: {len(frame)} bars, {len(trades)} trades, "
        f"cumulative {summary.cumulative_result:.4f} vs hold {summary.hold_result:.4f}"
    )
    return BacktestResult(
        strategy=strategy,
        trades=trades,
        indicators=signal_result.indicators,
        summary=summary,
    )
