"""Probability estimation module."""
from .probability_calculator import (
    DEFAULT_RISK_FREE_RATE,
    DEGENERATE_RESULT,
    NEUTRAL_PROFIT_PROBABILITY,
    ProbabilityResult,
    estimate_probability,
    normal_cdf,
    probability_from_delta,
    profit_probability,
)

__all__ = [
    'DEFAULT_RISK_FREE_RATE',
    'DEGENERATE_RESULT',
    'NEUTRAL_PROFIT_PROBABILITY',
    'ProbabilityResult',
    'estimate_probability',
    'normal_cdf',
    'probability_from_delta',
    'profit_probability',
]
