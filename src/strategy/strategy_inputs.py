"""Strategy types and the leg inputs each one requires.

Single-leg strategies take a SingleLegInput, spreads take a SpreadInput.
Dispatch checks the variant against the strategy type, so a spread can never
be evaluated with a missing long leg.
"""
from dataclasses import dataclass
from typing import Optional, Union

from src.payoff.models import is_number

LONG_CALL = 'long_call'
LONG_PUT = 'long_put'
SHORT_CALL = 'short_call'
SHORT_PUT = 'short_put'
BULL_PUT_SPREAD = 'bull_put_spread'
BEAR_CALL_SPREAD = 'bear_call_spread'

SINGLE_LEG_STRATEGIES = (LONG_CALL, LONG_PUT, SHORT_CALL, SHORT_PUT)
SPREAD_STRATEGIES = (BULL_PUT_SPREAD, BEAR_CALL_SPREAD)
STRATEGY_TYPES = SINGLE_LEG_STRATEGIES + SPREAD_STRATEGIES


def _check_strike(name: str, value) -> Optional[str]:
    if not is_number(value):
        return f"{name} is required and must be a number"
    if value <= 0:
        return f"{name} must be positive"
    return None


def _check_premium(name: str, value) -> Optional[str]:
    if not is_number(value):
        return f"{name} is required and must be a number"
    if value < 0:
        return f"{name} cannot be negative"
    return None


@dataclass(frozen=True)
class SingleLegInput:
    """Strike and per-share premium of a single-leg strategy."""
    strike_price: float
    premium: float

    def validate(self) -> tuple[bool, Optional[str]]:
        """Validate single-leg input.

        Returns:
            Tuple of (is_valid, error_message)
        """
        error = _check_strike("Strike price", self.strike_price)
        if error is None:
            error = _check_premium("Premium", self.premium)
        return error is None, error


@dataclass(frozen=True)
class SpreadInput:
    """Short and long legs of a two-leg vertical spread.

    Bull put spread: short the higher strike, buy the lower strike.
    Bear call spread: short the lower strike, buy the higher strike.
    """
    short_strike: float
    short_premium: float
    long_strike: float
    long_premium: float

    def validate(self) -> tuple[bool, Optional[str]]:
        """Validate field presence, sign and net credit; strike ordering is per strategy.

        Returns:
            Tuple of (is_valid, error_message)
        """
        for error in (
            _check_strike("Short strike", self.short_strike),
            _check_premium("Short premium", self.short_premium),
            _check_strike("Long strike", self.long_strike),
            _check_premium("Long premium", self.long_premium),
        ):
            if error is not None:
                return False, error

        # Both supported spreads are opened for a net credit
        if self.long_premium > self.short_premium:
            return False, "Long premium cannot exceed short premium for a credit spread"
        return True, None

    def validate_ordering(self, strategy_type: str) -> tuple[bool, Optional[str]]:
        """Validate strike ordering for the given spread type.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if strategy_type == BULL_PUT_SPREAD and self.short_strike <= self.long_strike:
            return False, "Short strike must be greater than long strike for bull put spread"
        if strategy_type == BEAR_CALL_SPREAD and self.short_strike >= self.long_strike:
            return False, "Short strike must be less than long strike for bear call spread"
        return True, None

    @property
    def width(self) -> float:
        """Distance between the strikes."""
        return abs(self.short_strike - self.long_strike)


LegInputs = Union[SingleLegInput, SpreadInput]
