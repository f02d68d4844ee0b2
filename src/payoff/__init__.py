"""Payoff algebra module."""
from .models import (
    CALL,
    PUT,
    LONG,
    SHORT,
    UNBOUNDED,
    OptionLeg,
    ProfitLossPoint,
    StrategyMetrics,
    Unbounded,
    ValidationError,
)
from .payoff_calculator import (
    analyze_legs,
    calculate_leg_pl,
    calculate_net_cost,
    calculate_strategy_pl,
    find_break_evens,
    generate_curve,
)

__all__ = [
    'CALL', 'PUT', 'LONG', 'SHORT', 'UNBOUNDED',
    'OptionLeg', 'ProfitLossPoint', 'StrategyMetrics', 'Unbounded', 'ValidationError',
    'analyze_legs', 'calculate_leg_pl', 'calculate_net_cost', 'calculate_strategy_pl',
    'find_break_evens', 'generate_curve',
]
