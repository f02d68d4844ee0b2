"""Strategy calculation module."""
from .strategy_calculator import StrategyCalculator
from .strategy_inputs import (
    BEAR_CALL_SPREAD,
    BULL_PUT_SPREAD,
    LONG_CALL,
    LONG_PUT,
    SHORT_CALL,
    SHORT_PUT,
    STRATEGY_TYPES,
    SingleLegInput,
    SpreadInput,
)

__all__ = [
    'StrategyCalculator', 'SingleLegInput', 'SpreadInput', 'STRATEGY_TYPES',
    'LONG_CALL', 'LONG_PUT', 'SHORT_CALL', 'SHORT_PUT', 'BULL_PUT_SPREAD', 'BEAR_CALL_SPREAD',
]
