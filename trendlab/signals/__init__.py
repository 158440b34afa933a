"""
Signal generation module.

Maps one strategy family (RSI momentum, Goldhand alignment, Moneyline
trend-line) plus its parameters to a per-bar enter/exit/none signal.
"""
from .config import BacktestParams, StrategyConfig
from .config_loader import load_config_from_yaml, save_config_to_yaml, config_from_dict
from .rules import (
    SignalRule,
    RsiThresholdRule,
    AlignmentTransitionRule,
    TrendFlipRule,
    get_rule,
)
from .generator import SignalResult, generate_signals

__all__ = [
    'BacktestParams',
    'StrategyConfig',
    'load_config_from_yaml',
    'save_config_to_yaml',
    'config_from_dict',
    'SignalRule',
    'RsiThresholdRule',
    'AlignmentTransitionRule',
    'TrendFlipRule',
    'get_rule',
    'SignalResult',
    'generate_signals',
]
