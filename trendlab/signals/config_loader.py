"""
YAML configuration loader for backtest strategies.

Loads strategy configurations from YAML files, allowing easy sharing
and modification of strategies without code changes.
"""
import yaml
from pathlib import Path
from typing import Any, Mapping, Union

from .config import BacktestParams, StrategyConfig
from ..shared.defaults import (
    MIN_BARS,
    RSI_PERIOD, RSI_BUY_LEVEL, RSI_SELL_LEVEL,
    GOLDHAND_PERIODS, GOLDHAND_BUY_STATE, GOLDHAND_SELL_STATE,
    MONEYLINE_PERIOD, MONEYLINE_MULT, MONEYLINE_STEP,
)


def config_from_dict(config_dict: Mapping[str, Any], default_name: str = "strategy") -> StrategyConfig:
    """
    Build a StrategyConfig from a nested mapping (the parsed YAML layout).

    Raises:
        ValueError: If the strategy is missing/unknown or a parameter is invalid
    """
    if "strategy" not in config_dict:
        raise ValueError("Config is missing required field: strategy")

    rsi = config_dict.get('rsi') or {}
    goldhand = config_dict.get('goldhand') or {}
    moneyline = config_dict.get('moneyline') or {}

    params = BacktestParams(
        # RSI
        rsi_period=rsi.get('period', RSI_PERIOD),
        rsi_buy=rsi.get('buy', RSI_BUY_LEVEL),
        rsi_sell=rsi.get('sell', RSI_SELL_LEVEL),
        rsi_saturate_zero_loss=rsi.get('saturate_zero_loss', False),

        # Goldhand
        goldhand_periods=tuple(goldhand.get('periods', GOLDHAND_PERIODS)),
        goldhand_buy_state=goldhand.get('buy_state', GOLDHAND_BUY_STATE),
        goldhand_sell_state=goldhand.get('sell_state', GOLDHAND_SELL_STATE),

        # Moneyline
        moneyline_period=moneyline.get('period', MONEYLINE_PERIOD),
        moneyline_mult=moneyline.get('mult', MONEYLINE_MULT),
        moneyline_step=moneyline.get('step', MONEYLINE_STEP),

        min_bars=config_dict.get('min_bars', MIN_BARS),
    )

    return StrategyConfig(
        name=config_dict.get('name', default_name),
        strategy=config_dict['strategy'],
        params=params,
        description=config_dict.get('description', ''),
    )


def load_config_from_yaml(yaml_path: Union[str, Path]) -> StrategyConfig:
    """
    Load strategy configuration from YAML file.

    Args:
        yaml_path: Path to YAML configuration file

    Returns:
        StrategyConfig object

    Raises:
        FileNotFoundError: If YAML file doesn't exist
        ValueError: If YAML is empty, invalid or missing required fields
    """
    yaml_path = Path(yaml_path)

    if not yaml_path.exists():
        raise FileNotFoundError(f"Config file not found: {yaml_path}")

    with open(yaml_path, 'r') as f:
        config_dict = yaml.safe_load(f)

    if not config_dict:
        raise ValueError(f"Empty config file: {yaml_path}")
    if not isinstance(config_dict, dict):
        raise ValueError(f"Config file must contain a mapping: {yaml_path}")

    return config_from_dict(config_dict, default_name=yaml_path.stem)


def save_config_to_yaml(config: StrategyConfig, yaml_path: Union[str, Path]) -> None:
    """Write a StrategyConfig in the layout load_config_from_yaml reads."""
    p = config.params
    config_dict = {
        'name': config.name,
        'description': config.description,
        'strategy': config.strategy.value,
        'rsi': {
            'period': p.rsi_period,
            'buy': p.rsi_buy,
            'sell': p.rsi_sell,
            'saturate_zero_loss': p.rsi_saturate_zero_loss,
        },
        'goldhand': {
            'periods': list(p.goldhand_periods),
            'buy_state': p.goldhand_buy_state.value,
            'sell_state': p.goldhand_sell_state.value,
        },
        'moneyline': {
            'period': p.moneyline_period,
            'mult': p.moneyline_mult,
            'step': p.moneyline_step,
        },
        'min_bars': p.min_bars,
    }
    with open(yaml_path, 'w') as f:
        yaml.safe_dump(config_dict, f, sort_keys=False)
