"""Expiration payoff algebra for arbitrary option leg combinations.

All functions here are pure: they take legs and prices and return numbers,
with no shared state, so they are safe to call concurrently.
"""
import math
from typing import List, Sequence

from .models import (
    CALL,
    UNBOUNDED,
    OptionLeg,
    ProfitLossPoint,
    StrategyMetrics,
    ValidationError,
    is_number,
)

CURVE_STEPS = 100  # 101 sampled points
BREAK_EVEN_SCAN_LOW = 0.5
BREAK_EVEN_SCAN_HIGH = 1.5


def _validate_price(name: str, price: float):
    if not is_number(price):
        raise ValidationError(f"{name} must be a number")
    if price <= 0:
        raise ValidationError(f"{name} must be positive")


def _validate_legs(legs: Sequence[OptionLeg]):
    if not legs:
        raise ValidationError("At least one option leg is required")
    for leg in legs:
        if not isinstance(leg, OptionLeg):
            raise ValidationError(f"Expected OptionLeg, got {type(leg).__name__}")


def calculate_intrinsic_value(option_type: str, strike_price: float, stock_price: float) -> float:
    """Intrinsic value per share at expiration."""
    if option_type == CALL:
        return max(0.0, stock_price - strike_price)
    return max(0.0, strike_price - stock_price)


def calculate_leg_pl(leg: OptionLeg, stock_price: float) -> float:
    """Calculate profit/loss of a single leg at expiration.

    Args:
        leg: Option leg
        stock_price: Hypothetical terminal price of the underlying

    Returns:
        P&L in dollars for the whole leg

    Raises:
        ValidationError: If stock_price is negative or not a number
    """
    if not is_number(stock_price) or stock_price < 0:
        raise ValidationError("Stock price must be a non-negative number")

    intrinsic = calculate_intrinsic_value(leg.option_type, leg.strike_price, stock_price)
    if leg.is_long:
        # Bought option: pay premium, receive intrinsic value
        return (intrinsic - leg.premium) * leg.total_shares
    # Sold option: receive premium, pay intrinsic value
    return (leg.premium - intrinsic) * leg.total_shares


def calculate_strategy_pl(legs: Sequence[OptionLeg], stock_price: float) -> float:
    """Aggregate P&L of all legs at one terminal price."""
    return sum(calculate_leg_pl(leg, stock_price) for leg in legs)


def calculate_net_cost(legs: Sequence[OptionLeg]) -> float:
    """Net premium outlay: positive for a debit, negative for a credit."""
    total = 0.0
    for leg in legs:
        cost = leg.premium * leg.total_shares
        total += cost if leg.is_long else -cost
    return total


def generate_curve(
    legs: Sequence[OptionLeg],
    current_price: float,
    price_range: float = 0.5,
) -> List[ProfitLossPoint]:
    """Generate the P&L curve used for charting.

    Samples 101 evenly spaced terminal prices across
    [current_price * (1 - price_range), current_price * (1 + price_range)].
    Prices and P&L are rounded to cents.

    Args:
        legs: Option legs of the strategy
        current_price: Current price of the underlying
        price_range: Half-width of the sampled range as a fraction of current_price

    Returns:
        List of 101 ProfitLossPoint ordered by price

    Raises:
        ValidationError: If inputs are invalid
    """
    _validate_legs(legs)
    _validate_price("Current price", current_price)
    if not is_number(price_range) or price_range <= 0:
        raise ValidationError("Price range must be a positive number")
    if price_range > 1:
        raise ValidationError("Price range cannot exceed 1 (prices would go negative)")

    min_price = current_price * (1 - price_range)
    max_price = current_price * (1 + price_range)
    step = (max_price - min_price) / CURVE_STEPS

    points = []
    for i in range(CURVE_STEPS + 1):
        # Index-based so the last sample is exactly max_price
        price = max_price if i == CURVE_STEPS else min_price + i * step
        points.append(ProfitLossPoint(
            stock_price=round(price, 2),
            profit_loss=round(calculate_strategy_pl(legs, price), 2),
        ))
    return points


def find_break_evens(legs: Sequence[OptionLeg], current_price: float) -> List[float]:
    """Locate break-even prices by scanning in $0.01 increments.

    Scans cent-aligned prices over [0.5 * current_price, 1.5 * current_price]
    and records the price where aggregate P&L changes sign. A zero landing
    exactly on a step is recorded once.

    Args:
        legs: Option legs of the strategy
        current_price: Current price of the underlying

    Returns:
        Ascending list of break-even prices

    Raises:
        ValidationError: If inputs are invalid
    """
    _validate_legs(legs)
    _validate_price("Current price", current_price)

    start_cents = math.ceil(round(current_price * BREAK_EVEN_SCAN_LOW * 100, 6))
    end_cents = math.floor(round(current_price * BREAK_EVEN_SCAN_HIGH * 100, 6))

    # P&L is quantized so a zero landing on a cent step reads as exactly zero
    break_evens = []
    previous_pl = round(calculate_strategy_pl(legs, start_cents / 100), 6)
    for cents in range(start_cents + 1, end_cents + 1):
        price = cents / 100
        current_pl = round(calculate_strategy_pl(legs, price), 6)
        if (previous_pl < 0 and current_pl >= 0) or (previous_pl > 0 and current_pl <= 0):
            break_evens.append(round(price, 2))
        previous_pl = current_pl

    return break_evens


def analyze_legs(legs: Sequence[OptionLeg], current_price: float) -> StrategyMetrics:
    """Compute metrics for an arbitrary leg combination.

    Expiration P&L is piecewise linear with kinks at the strikes, so the
    extremes over [0, inf) sit at zero, at a strike, or at infinity. The net
    call exposure decides the slope beyond the highest strike.

    Args:
        legs: Option legs of the strategy
        current_price: Current price of the underlying

    Returns:
        StrategyMetrics with scanned break-even points
    """
    _validate_legs(legs)
    _validate_price("Current price", current_price)

    call_slope = sum(
        leg.total_shares if leg.is_long else -leg.total_shares
        for leg in legs if leg.option_type == CALL
    )
    kink_prices = [0.0] + sorted({leg.strike_price for leg in legs})
    kink_pl = [calculate_strategy_pl(legs, price) for price in kink_prices]

    max_profit = UNBOUNDED if call_slope > 0 else round(max(kink_pl), 2)
    if call_slope < 0:
        max_loss = UNBOUNDED
    else:
        max_loss = round(max(0.0, -min(kink_pl)), 2)

    return StrategyMetrics(
        net_cost=round(calculate_net_cost(legs), 2),
        max_profit=max_profit,
        max_loss=max_loss,
        break_even_points=find_break_evens(legs, current_price),
    )
