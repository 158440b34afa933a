"""
Strategy configuration for backtests.

BacktestParams is the parameter record consumed by the signal generator;
every field is optional with a centralized default. Validation runs at
construction time (fail fast with clear errors), never inside a backtest.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple, Union

from ..shared.defaults import (
    MIN_BARS,
    RSI_PERIOD, RSI_BUY_LEVEL, RSI_SELL_LEVEL,
    GOLDHAND_PERIODS, GOLDHAND_BUY_STATE, GOLDHAND_SELL_STATE,
    MONEYLINE_PERIOD, MONEYLINE_MULT, MONEYLINE_STEP,
)
from ..shared.types import AlignmentState, StrategyType


def _validate_params(params: "BacktestParams") -> None:
    """Validate indicator and strategy parameters. Raises ValueError with clear message on failure."""
    if params.rsi_period < 1:
        raise ValueError(f"rsi_period must be >= 1, got {params.rsi_period}")
    if not (0 <= params.rsi_buy <= 100) or not (0 <= params.rsi_sell <= 100):
        raise ValueError(
            f"RSI levels must be in [0, 100], got buy={params.rsi_buy} sell={params.rsi_sell}"
        )
    if len(params.goldhand_periods) != 4:
        raise ValueError(
            f"goldhand_periods must have exactly 4 values, got {len(params.goldhand_periods)}"
        )
    if any(p < 1 for p in params.goldhand_periods):
        raise ValueError(f"goldhand_periods must all be >= 1, got {params.goldhand_periods}")
    if any(a >= b for a, b in zip(params.goldhand_periods, params.goldhand_periods[1:])):
        raise ValueError(
            f"goldhand_periods must be strictly ascending, got {params.goldhand_periods}"
        )
    if params.moneyline_period < 1:
        raise ValueError(f"moneyline_period must be >= 1, got {params.moneyline_period}")
    if params.moneyline_mult <= 0:
        raise ValueError(f"moneyline_mult must be > 0, got {params.moneyline_mult}")
    if not (0 < params.moneyline_step <= 1):
        raise ValueError(f"moneyline_step must be in (0, 1], got {params.moneyline_step}")
    if params.min_bars < 2:
        raise ValueError(f"min_bars must be >= 2, got {params.min_bars}")


@dataclass
class BacktestParams:
    """Parameters for all strategy families; only the selected family's fields are used."""
    # RSI (momentum)
    rsi_period: int = RSI_PERIOD
    rsi_buy: float = RSI_BUY_LEVEL
    rsi_sell: float = RSI_SELL_LEVEL
    rsi_saturate_zero_loss: bool = False  # Report RSI 100 instead of dividing a zero loss as 1

    # Goldhand (alignment)
    goldhand_periods: Tuple[int, int, int, int] = GOLDHAND_PERIODS
    goldhand_buy_state: Union[AlignmentState, str] = GOLDHAND_BUY_STATE
    goldhand_sell_state: Union[AlignmentState, str] = GOLDHAND_SELL_STATE

    # Moneyline (trend-line)
    moneyline_period: int = MONEYLINE_PERIOD
    moneyline_mult: float = MONEYLINE_MULT
    moneyline_step: float = MONEYLINE_STEP

    # Series shorter than this produce an empty result
    min_bars: int = MIN_BARS

    def __post_init__(self) -> None:
        self.goldhand_periods = tuple(int(p) for p in self.goldhand_periods)
        self.goldhand_buy_state = AlignmentState.parse(self.goldhand_buy_state)
        self.goldhand_sell_state = AlignmentState.parse(self.goldhand_sell_state)
        _validate_params(self)

    @classmethod
    def from_legacy(cls, raw: Mapping[str, Any]) -> "BacktestParams":
        """
        Build params from the dashboard's camelCase record.

        Keys: rsiBuy, rsiSell, ghBuyColor, ghSellColor, mlMult, ghP1..ghP4.
        Missing or falsy values fall back to the defaults.
        """
        periods = tuple(
            raw.get(f"ghP{i + 1}") or default
            for i, default in enumerate(GOLDHAND_PERIODS)
        )
        return cls(
            rsi_buy=raw.get("rsiBuy") or RSI_BUY_LEVEL,
            rsi_sell=raw.get("rsiSell") or RSI_SELL_LEVEL,
            goldhand_periods=periods,
            goldhand_buy_state=raw.get("ghBuyColor") or GOLDHAND_BUY_STATE,
            goldhand_sell_state=raw.get("ghSellColor") or GOLDHAND_SELL_STATE,
            moneyline_mult=raw.get("mlMult") or MONEYLINE_MULT,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rsi_period": self.rsi_period,
            "rsi_buy": self.rsi_buy,
            "rsi_sell": self.rsi_sell,
            "rsi_saturate_zero_loss": self.rsi_saturate_zero_loss,
            "goldhand_periods": list(self.goldhand_periods),
            "goldhand_buy_state": self.goldhand_buy_state.value,
            "goldhand_sell_state": self.goldhand_sell_state.value,
            "moneyline_period": self.moneyline_period,
            "moneyline_mult": self.moneyline_mult,
            "moneyline_step": self.moneyline_step,
            "min_bars": self.min_bars,
        }


@dataclass
class StrategyConfig:
    """A named strategy: the family to run and its parameters."""
    name: str
    strategy: Union[StrategyType, str] = StrategyType.RSI
    params: BacktestParams = field(default_factory=BacktestParams)
    description: str = ""

    def __post_init__(self) -> None:
        self.strategy = StrategyType.parse(self.strategy)
