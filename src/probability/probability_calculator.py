"""Black-Scholes probability calculator.

Estimates the probability of an option finishing in-the-money under a
lognormal terminal price, and reframes that as a strategy's probability of
profit by treating the break-even price as a strike.
"""
import math
from dataclasses import dataclass
from typing import Optional

from src.payoff.models import CALL, LONG, OPTION_TYPES, POSITIONS, PUT, ValidationError, is_number

DEFAULT_RISK_FREE_RATE = 0.05
DAYS_PER_YEAR = 365
NEUTRAL_PROFIT_PROBABILITY = 50.0

# Abramowitz & Stegun 26.2.17, |error| < 7.5e-8
_CDF_P = 0.2316419
_CDF_B = (0.319381530, -0.356563782, 1.781477937, -1.821255978, 1.330274429)
_INV_SQRT_2PI = 1 / math.sqrt(2 * math.pi)


@dataclass(frozen=True)
class ProbabilityResult:
    """Black-Scholes probability metrics (probabilities are 0-1)."""
    probability_itm: float
    probability_otm: float
    d1: float
    d2: float

    def to_dict(self):
        return {
            'probability_itm': self.probability_itm,
            'probability_otm': self.probability_otm,
            'd1': self.d1,
            'd2': self.d2,
        }


DEGENERATE_RESULT = ProbabilityResult(probability_itm=0.0, probability_otm=1.0, d1=0.0, d2=0.0)


def normal_cdf(x: float) -> float:
    """Standard normal cumulative distribution function."""
    t = 1 / (1 + _CDF_P * abs(x))
    b1, b2, b3, b4, b5 = _CDF_B
    poly = t * (b1 + t * (b2 + t * (b3 + t * (b4 + t * b5))))
    tail = _INV_SQRT_2PI * math.exp(-x * x / 2) * poly
    return 1 - tail if x > 0 else tail


def _validate_option_type(option_type: str):
    if option_type not in OPTION_TYPES:
        raise ValidationError(f"Option type must be one of {list(OPTION_TYPES)}")


def estimate_probability(
    stock_price: float,
    strike_price: float,
    days_to_expiration: float,
    implied_volatility: float,
    option_type: str,
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
) -> ProbabilityResult:
    """Calculate the probability of expiring in-the-money.

    Calls: P(S_T > K) = N(d2). Puts: P(S_T < K) = N(-d2), where
    d1 = (ln(S/K) + (r + sigma^2 / 2) T) / (sigma sqrt(T)) and
    d2 = d1 - sigma sqrt(T).

    Non-positive time, volatility, stock price or strike return the
    degenerate result (ITM 0, OTM 1, d1 = d2 = 0) instead of raising.

    Args:
        stock_price: Current underlying price (S)
        strike_price: Strike price (K)
        days_to_expiration: Calendar days until expiration
        implied_volatility: Annualized volatility as a decimal (0.25 for 25%)
        option_type: 'call' or 'put'
        risk_free_rate: Annual risk-free rate as a decimal

    Returns:
        ProbabilityResult

    Raises:
        ValidationError: If an argument is not a number or option_type is unknown
    """
    _validate_option_type(option_type)
    for name, value in (
        ("Stock price", stock_price),
        ("Strike price", strike_price),
        ("Days to expiration", days_to_expiration),
        ("Implied volatility", implied_volatility),
        ("Risk-free rate", risk_free_rate),
    ):
        if not is_number(value):
            raise ValidationError(f"{name} must be a number")

    time_to_expiration = days_to_expiration / DAYS_PER_YEAR
    sigma = implied_volatility

    if time_to_expiration <= 0 or sigma <= 0 or stock_price <= 0 or strike_price <= 0:
        return DEGENERATE_RESULT

    sigma_sqrt_t = sigma * math.sqrt(time_to_expiration)
    d1 = (
        math.log(stock_price / strike_price)
        + (risk_free_rate + sigma ** 2 / 2) * time_to_expiration
    ) / sigma_sqrt_t
    d2 = d1 - sigma_sqrt_t

    if option_type == CALL:
        probability_itm = normal_cdf(d2)
    else:
        probability_itm = normal_cdf(-d2)

    return ProbabilityResult(
        probability_itm=probability_itm,
        probability_otm=1 - probability_itm,
        d1=d1,
        d2=d2,
    )


def probability_from_delta(delta: float, option_type: str) -> float:
    """Approximate the ITM probability with the option's delta.

    Cheaper and less accurate than estimate_probability. Put deltas are
    negative, so the magnitude is used for both types.
    """
    _validate_option_type(option_type)
    if not is_number(delta) or abs(delta) > 1:
        raise ValidationError("Delta must be a number between -1 and 1")
    return abs(delta)


def profit_probability(
    current_price: float,
    break_even_price: float,
    implied_volatility: Optional[float],
    days_to_expiration: Optional[float],
    position_direction: str,
    option_type: str,
    risk_free_rate: float = DEFAULT_RISK_FREE_RATE,
) -> float:
    """Probability that a strategy finishes past its break-even, in percent.

    The break-even is treated as a strike. A long (premium paid) position
    profits when its own option type finishes ITM at that strike. A short
    (premium received) position profits when the opposite type does, so the
    type is flipped before querying.

    Missing or non-positive volatility or days return the neutral 50.0.

    Args:
        current_price: Current underlying price
        break_even_price: Strategy break-even price
        implied_volatility: Annualized volatility as a decimal, or None
        days_to_expiration: Calendar days until expiration, or None
        position_direction: 'long' or 'short'
        option_type: Option type of the strategy ('call' or 'put')
        risk_free_rate: Annual risk-free rate as a decimal

    Returns:
        Probability of profit as a percentage rounded to 2 decimals
    """
    _validate_option_type(option_type)
    if position_direction not in POSITIONS:
        raise ValidationError(f"Position direction must be one of {list(POSITIONS)}")

    if not is_number(implied_volatility) or not is_number(days_to_expiration):
        return NEUTRAL_PROFIT_PROBABILITY
    if implied_volatility <= 0 or days_to_expiration <= 0:
        return NEUTRAL_PROFIT_PROBABILITY

    if position_direction == LONG:
        query_type = option_type
    else:
        query_type = PUT if option_type == CALL else CALL

    if not is_number(break_even_price):
        raise ValidationError("Break-even price must be a number")
    if break_even_price <= 0:
        # A lognormal price always finishes above a non-positive level
        probability_itm = 1.0 if query_type == CALL else 0.0
    else:
        result = estimate_probability(
            stock_price=current_price,
            strike_price=break_even_price,
            days_to_expiration=days_to_expiration,
            implied_volatility=implied_volatility,
            option_type=query_type,
            risk_free_rate=risk_free_rate,
        )
        probability_itm = result.probability_itm

    return round(probability_itm * 100, 2)
