"""Strategy calculator for options strategies."""
from typing import Optional, Tuple

from src.config.models import Config
from src.payoff.models import (
    CALL,
    LONG,
    PUT,
    SHORT,
    UNBOUNDED,
    OptionLeg,
    StrategyMetrics,
    ValidationError,
    is_number,
)
from src.probability.probability_calculator import profit_probability
from .strategy_inputs import (
    BEAR_CALL_SPREAD,
    BULL_PUT_SPREAD,
    LONG_CALL,
    LONG_PUT,
    SHORT_CALL,
    SHORT_PUT,
    SINGLE_LEG_STRATEGIES,
    SPREAD_STRATEGIES,
    STRATEGY_TYPES,
    LegInputs,
    SingleLegInput,
    SpreadInput,
)

# (position direction, option type) used for the probability-of-profit query
_PROBABILITY_FRAMING = {
    LONG_CALL: (LONG, CALL),
    LONG_PUT: (LONG, PUT),
    SHORT_CALL: (SHORT, CALL),
    SHORT_PUT: (SHORT, PUT),
    BULL_PUT_SPREAD: (SHORT, PUT),
    BEAR_CALL_SPREAD: (SHORT, CALL),
}


class StrategyCalculator:
    """Closed-form metrics for the supported options strategies.

    Every calculator returns exactly one break-even point. Structures with
    several break-evens go through src.payoff.analyze_legs instead.
    """

    def __init__(self, config: Optional[Config] = None, logger=None):
        """Initialize the StrategyCalculator.

        Args:
            config: Configuration object (contract multiplier, risk-free rate)
            logger: Optional AnalyzerLogger
        """
        self._config = config or Config()
        self._logger = logger

    @property
    def shares_per_contract(self) -> int:
        return self._config.shares_per_contract

    def _validate_common(self, quantity: float, current_price: float):
        if not is_number(quantity) or quantity <= 0:
            raise ValidationError("Quantity must be a positive number")
        if not is_number(current_price) or current_price <= 0:
            raise ValidationError("Current price must be a positive number")

    def validate_single_leg(self, leg_inputs: SingleLegInput) -> bool:
        """Validate single-leg inputs.

        Raises:
            ValidationError: If validation fails with error message
        """
        is_valid, error_message = leg_inputs.validate()
        if not is_valid:
            raise ValidationError(f"Strategy input validation error: {error_message}")
        return True

    def validate_spread(self, strategy_type: str, leg_inputs: SpreadInput) -> bool:
        """Validate spread inputs, including strike ordering.

        Raises:
            ValidationError: If validation fails with error message
        """
        is_valid, error_message = leg_inputs.validate()
        if is_valid:
            is_valid, error_message = leg_inputs.validate_ordering(strategy_type)
        if not is_valid:
            raise ValidationError(f"Spread validation error: {error_message}")
        return True

    def calculate_long_call(self, strike_price: float, premium: float,
                            quantity: float = 1, current_price: float = None) -> StrategyMetrics:
        """Long call: pay premium, unlimited upside.

        Args:
            strike_price: Call strike
            premium: Premium paid per share
            quantity: Number of contracts
            current_price: Current underlying price

        Returns:
            StrategyMetrics
        """
        self._validate_common(quantity, current_price)
        self.validate_single_leg(SingleLegInput(strike_price, premium))

        net_cost = round(premium * quantity * self.shares_per_contract, 2)
        return StrategyMetrics(
            net_cost=net_cost,
            max_profit=UNBOUNDED,
            max_loss=net_cost,
            break_even_points=[round(strike_price + premium, 2)],
        )

    def calculate_long_put(self, strike_price: float, premium: float,
                           quantity: float = 1, current_price: float = None) -> StrategyMetrics:
        """Long put: pay premium, profit capped at the stock going to zero."""
        self._validate_common(quantity, current_price)
        self.validate_single_leg(SingleLegInput(strike_price, premium))

        net_cost = round(premium * quantity * self.shares_per_contract, 2)
        return StrategyMetrics(
            net_cost=net_cost,
            max_profit=round((strike_price - premium) * quantity * self.shares_per_contract, 2),
            max_loss=net_cost,
            break_even_points=[round(strike_price - premium, 2)],
        )

    def calculate_short_call(self, strike_price: float, premium: float,
                             quantity: float = 1, current_price: float = None) -> StrategyMetrics:
        """Short call: collect premium, unlimited risk."""
        self._validate_common(quantity, current_price)
        self.validate_single_leg(SingleLegInput(strike_price, premium))

        credit = round(premium * quantity * self.shares_per_contract, 2)
        return StrategyMetrics(
            net_cost=-credit,
            max_profit=credit,
            max_loss=UNBOUNDED,
            break_even_points=[round(strike_price + premium, 2)],
        )

    def calculate_short_put(self, strike_price: float, premium: float,
                            quantity: float = 1, current_price: float = None) -> StrategyMetrics:
        """Short put: collect premium, loss capped at the stock going to zero."""
        self._validate_common(quantity, current_price)
        self.validate_single_leg(SingleLegInput(strike_price, premium))

        credit = round(premium * quantity * self.shares_per_contract, 2)
        return StrategyMetrics(
            net_cost=-credit,
            max_profit=credit,
            max_loss=round((strike_price - premium) * quantity * self.shares_per_contract, 2),
            break_even_points=[round(strike_price - premium, 2)],
        )

    def calculate_bull_put_spread(self, short_strike: float, short_premium: float,
                                  long_strike: float, long_premium: float,
                                  quantity: float = 1, current_price: float = None) -> StrategyMetrics:
        """Bull put spread: sell the higher strike put, buy the lower strike put.

        Profits if the stock stays above the short strike.

        Raises:
            ValidationError: If the short strike is not above the long strike
        """
        self._validate_common(quantity, current_price)
        spread = SpreadInput(short_strike, short_premium, long_strike, long_premium)
        self.validate_spread(BULL_PUT_SPREAD, spread)

        return self._credit_spread_metrics(
            spread, quantity, break_even=short_strike - (short_premium - long_premium)
        )

    def calculate_bear_call_spread(self, short_strike: float, short_premium: float,
                                   long_strike: float, long_premium: float,
                                   quantity: float = 1, current_price: float = None) -> StrategyMetrics:
        """Bear call spread: sell the lower strike call, buy the higher strike call.

        Profits if the stock stays below the short strike.

        Raises:
            ValidationError: If the short strike is not below the long strike
        """
        self._validate_common(quantity, current_price)
        spread = SpreadInput(short_strike, short_premium, long_strike, long_premium)
        self.validate_spread(BEAR_CALL_SPREAD, spread)

        return self._credit_spread_metrics(
            spread, quantity, break_even=short_strike + (short_premium - long_premium)
        )

    def _credit_spread_metrics(self, spread: SpreadInput, quantity: float,
                               break_even: float) -> StrategyMetrics:
        """Metrics shared by both credit spreads: risk is the width less the credit."""
        shares = quantity * self.shares_per_contract
        net_credit = round((spread.short_premium - spread.long_premium) * shares, 2)
        max_loss = round(spread.width * shares - net_credit, 2)
        return StrategyMetrics(
            net_cost=-net_credit,
            max_profit=net_credit,
            max_loss=max_loss,
            break_even_points=[round(break_even, 2)],
            return_on_risk=self._return_on_risk(net_credit, max_loss),
        )

    @staticmethod
    def _return_on_risk(max_profit: float, max_loss: float) -> Optional[float]:
        """Max profit as a percentage of max loss; None when nothing is at risk."""
        if max_loss == 0:
            return None
        return max_profit / abs(max_loss) * 100

    def _check_variant(self, strategy_type: str, leg_inputs: LegInputs):
        if strategy_type not in STRATEGY_TYPES:
            raise ValidationError(
                f"Unsupported strategy type: {strategy_type}. Supported: {', '.join(STRATEGY_TYPES)}"
            )
        if strategy_type in SINGLE_LEG_STRATEGIES and not isinstance(leg_inputs, SingleLegInput):
            raise ValidationError(f"{strategy_type} requires a SingleLegInput (strike_price, premium)")
        if strategy_type in SPREAD_STRATEGIES and not isinstance(leg_inputs, SpreadInput):
            raise ValidationError(
                f"{strategy_type} requires a SpreadInput "
                f"(short_strike, short_premium, long_strike, long_premium)"
            )

    def compute_metrics(
        self,
        strategy_type: str,
        current_price: float,
        leg_inputs: LegInputs,
        quantity: float = 1,
        implied_volatility: Optional[float] = None,
        days_to_expiration: Optional[float] = None,
    ) -> StrategyMetrics:
        """Compute metrics for a strategy type.

        Profit probability is attached only when both implied volatility and
        days to expiration are supplied and positive.

        Args:
            strategy_type: One of STRATEGY_TYPES
            current_price: Current underlying price
            leg_inputs: SingleLegInput or SpreadInput matching the strategy type
            quantity: Number of contracts (or spreads)
            implied_volatility: Annualized volatility as a decimal
            days_to_expiration: Calendar days until expiration

        Returns:
            StrategyMetrics

        Raises:
            ValidationError: If inputs are missing, non-numeric or inconsistent
        """
        self._check_variant(strategy_type, leg_inputs)

        if strategy_type == LONG_CALL:
            metrics = self.calculate_long_call(leg_inputs.strike_price, leg_inputs.premium,
                                               quantity, current_price)
        elif strategy_type == LONG_PUT:
            metrics = self.calculate_long_put(leg_inputs.strike_price, leg_inputs.premium,
                                              quantity, current_price)
        elif strategy_type == SHORT_CALL:
            metrics = self.calculate_short_call(leg_inputs.strike_price, leg_inputs.premium,
                                                quantity, current_price)
        elif strategy_type == SHORT_PUT:
            metrics = self.calculate_short_put(leg_inputs.strike_price, leg_inputs.premium,
                                               quantity, current_price)
        elif strategy_type == BULL_PUT_SPREAD:
            metrics = self.calculate_bull_put_spread(
                leg_inputs.short_strike, leg_inputs.short_premium,
                leg_inputs.long_strike, leg_inputs.long_premium,
                quantity, current_price,
            )
        else:
            metrics = self.calculate_bear_call_spread(
                leg_inputs.short_strike, leg_inputs.short_premium,
                leg_inputs.long_strike, leg_inputs.long_premium,
                quantity, current_price,
            )

        if (is_number(implied_volatility) and implied_volatility > 0
                and is_number(days_to_expiration) and days_to_expiration > 0):
            direction, option_type = _PROBABILITY_FRAMING[strategy_type]
            metrics.profit_probability = profit_probability(
                current_price=current_price,
                break_even_price=metrics.break_even_points[0],
                implied_volatility=implied_volatility,
                days_to_expiration=days_to_expiration,
                position_direction=direction,
                option_type=option_type,
                risk_free_rate=self._config.risk_free_rate,
            )

        if self._logger:
            self._logger.log_debug(
                f"Computed {strategy_type} metrics",
                {"net_cost": metrics.net_cost, "break_even": metrics.break_even_points},
            )

        return metrics

    def build_legs(self, strategy_type: str, leg_inputs: LegInputs,
                   quantity: float = 1) -> Tuple[OptionLeg, ...]:
        """Build the option legs a strategy type represents.

        Args:
            strategy_type: One of STRATEGY_TYPES
            leg_inputs: SingleLegInput or SpreadInput matching the strategy type
            quantity: Number of contracts (or spreads)

        Returns:
            Tuple of OptionLeg (short leg first for spreads)
        """
        self._check_variant(strategy_type, leg_inputs)
        shares = self.shares_per_contract

        if strategy_type in SINGLE_LEG_STRATEGIES:
            self.validate_single_leg(leg_inputs)
            position, option_type = strategy_type.split('_')
            return (OptionLeg(option_type, position, leg_inputs.strike_price,
                              leg_inputs.premium, quantity, shares),)

        self.validate_spread(strategy_type, leg_inputs)
        option_type = PUT if strategy_type == BULL_PUT_SPREAD else CALL
        return (
            OptionLeg(option_type, SHORT, leg_inputs.short_strike,
                      leg_inputs.short_premium, quantity, shares),
            OptionLeg(option_type, LONG, leg_inputs.long_strike,
                      leg_inputs.long_premium, quantity, shares),
        )
