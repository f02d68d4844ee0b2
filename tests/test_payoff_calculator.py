"""Unit tests for the payoff calculator."""
import pytest
from src.payoff import (
    CALL,
    PUT,
    LONG,
    SHORT,
    UNBOUNDED,
    OptionLeg,
    ProfitLossPoint,
    StrategyMetrics,
    ValidationError,
    analyze_legs,
    calculate_leg_pl,
    calculate_net_cost,
    calculate_strategy_pl,
    find_break_evens,
    generate_curve,
)


@pytest.fixture
def long_call():
    """Long 100 call bought for $5."""
    return OptionLeg(option_type=CALL, position=LONG, strike_price=100.0, premium=5.0)


@pytest.fixture
def bull_put_legs():
    """Short 100 put at $3 and long 95 put at $1."""
    return [
        OptionLeg(PUT, SHORT, 100.0, 3.0),
        OptionLeg(PUT, LONG, 95.0, 1.0),
    ]


class TestOptionLeg:
    """Tests for OptionLeg validation."""

    def test_defaults(self, long_call):
        """Test default quantity and multiplier."""
        assert long_call.quantity == 1
        assert long_call.shares_per_contract == 100
        assert long_call.total_shares == 100

    def test_leg_is_immutable(self, long_call):
        """Test that legs cannot be modified after creation."""
        with pytest.raises(AttributeError):
            long_call.premium = 6.0

    @pytest.mark.parametrize("kwargs, message", [
        ({"option_type": "straddle"}, "Option type must be one of"),
        ({"position": "flat"}, "Position must be one of"),
        ({"strike_price": 0}, "Strike price must be positive"),
        ({"strike_price": None}, "Strike price must be a number"),
        ({"premium": -1.0}, "Premium cannot be negative"),
        ({"quantity": 0}, "Quantity must be positive"),
        ({"shares_per_contract": 0}, "Shares per contract must be positive"),
        ({"premium": float("nan")}, "Premium must be a number"),
    ])
    def test_invalid_leg(self, kwargs, message):
        """Test that invalid legs are rejected."""
        fields = dict(option_type=CALL, position=LONG, strike_price=100.0, premium=5.0)
        fields.update(kwargs)

        with pytest.raises(ValidationError, match=message):
            OptionLeg(**fields)

    def test_validation_error_is_value_error(self):
        """Test that callers catching ValueError still see validation failures."""
        with pytest.raises(ValueError):
            OptionLeg(CALL, LONG, -5.0, 1.0)


class TestLegPayoff:
    """Tests for single-leg payoff."""

    def test_long_call_payoff(self, long_call):
        """Test long call P&L above and below the strike."""
        assert calculate_leg_pl(long_call, 90.0) == -500.0
        assert calculate_leg_pl(long_call, 105.0) == 0.0
        assert calculate_leg_pl(long_call, 120.0) == 1500.0

    def test_short_call_payoff(self):
        """Test short call P&L mirrors the long call."""
        leg = OptionLeg(CALL, SHORT, 100.0, 5.0)

        assert calculate_leg_pl(leg, 90.0) == 500.0
        assert calculate_leg_pl(leg, 120.0) == -1500.0

    def test_long_put_payoff(self):
        """Test long put P&L including a price of zero."""
        leg = OptionLeg(PUT, LONG, 50.0, 2.0, quantity=2)

        assert calculate_leg_pl(leg, 0.0) == (50.0 - 2.0) * 200
        assert calculate_leg_pl(leg, 60.0) == -400.0

    def test_short_put_payoff(self):
        """Test short put P&L."""
        leg = OptionLeg(PUT, SHORT, 50.0, 2.0)

        assert calculate_leg_pl(leg, 55.0) == 200.0
        assert calculate_leg_pl(leg, 45.0) == -300.0

    def test_custom_multiplier(self):
        """Test a non-standard contract multiplier."""
        leg = OptionLeg(CALL, LONG, 10.0, 1.0, quantity=3, shares_per_contract=10)

        assert calculate_leg_pl(leg, 12.0) == (2.0 - 1.0) * 30

    def test_negative_price_rejected(self, long_call):
        """Test that payoff is undefined for negative prices."""
        with pytest.raises(ValidationError, match="non-negative"):
            calculate_leg_pl(long_call, -1.0)

    @pytest.mark.parametrize("stock_price", [0.0, 37.5, 99.99, 100.0, 250.0])
    @pytest.mark.parametrize("option_type", [CALL, PUT])
    def test_hedged_pair_is_flat(self, option_type, stock_price):
        """Test that long and short of the same contract net to the premium difference."""
        bought = OptionLeg(option_type, LONG, 100.0, 4.25)
        sold = OptionLeg(option_type, SHORT, 100.0, 4.75)

        combined = calculate_strategy_pl([bought, sold], stock_price)

        assert combined == pytest.approx((4.75 - 4.25) * 100)

    def test_strategy_pl_sums_legs(self, bull_put_legs):
        """Test aggregate P&L of a spread."""
        assert calculate_strategy_pl(bull_put_legs, 110.0) == pytest.approx(200.0)
        assert calculate_strategy_pl(bull_put_legs, 90.0) == pytest.approx(-300.0)

    def test_net_cost(self, long_call, bull_put_legs):
        """Test debit and credit net cost."""
        assert calculate_net_cost([long_call]) == 500.0
        assert calculate_net_cost(bull_put_legs) == pytest.approx(-200.0)


class TestGenerateCurve:
    """Tests for the P&L curve sampler."""

    def test_curve_shape(self, long_call):
        """Test long call curve over +/- 30%."""
        curve = generate_curve([long_call], current_price=100.0, price_range=0.3)

        assert len(curve) == 101
        assert all(isinstance(point, ProfitLossPoint) for point in curve)
        assert curve[0] == ProfitLossPoint(stock_price=70.0, profit_loss=-500.0)
        assert curve[-1].stock_price == 130.0
        assert curve[-1].profit_loss == pytest.approx(2500.0)

        near_break_even = min(curve, key=lambda p: abs(p.stock_price - 105.0))
        assert abs(near_break_even.profit_loss) <= 60.0

    def test_curve_is_ascending_and_rounded(self, bull_put_legs):
        """Test ordering and cent rounding."""
        curve = generate_curve(bull_put_legs, current_price=101.37)

        prices = [point.stock_price for point in curve]
        assert prices == sorted(prices)
        assert all(round(p, 2) == p for p in prices)
        assert all(round(point.profit_loss, 2) == point.profit_loss for point in curve)

    def test_default_range(self, long_call):
        """Test the default +/- 50% range."""
        curve = generate_curve([long_call], current_price=100.0)

        assert curve[0].stock_price == 50.0
        assert curve[-1].stock_price == 150.0

    def test_curve_is_deterministic(self, bull_put_legs):
        """Test that identical inputs produce identical sequences."""
        first = generate_curve(bull_put_legs, 98.76, 0.4)
        second = generate_curve(bull_put_legs, 98.76, 0.4)

        assert first == second
        assert first is not second

    @pytest.mark.parametrize("current_price, price_range, message", [
        (0, 0.5, "Current price must be positive"),
        (-10, 0.5, "Current price must be positive"),
        (100, 0, "Price range must be a positive number"),
        (100, -0.2, "Price range must be a positive number"),
        (100, 1.5, "Price range cannot exceed 1"),
    ])
    def test_invalid_inputs(self, long_call, current_price, price_range, message):
        """Test rejection of degenerate curve requests."""
        with pytest.raises(ValidationError, match=message):
            generate_curve([long_call], current_price, price_range)

    def test_empty_legs(self):
        """Test that a curve requires at least one leg."""
        with pytest.raises(ValidationError, match="At least one option leg"):
            generate_curve([], 100.0)


class TestFindBreakEvens:
    """Tests for the break-even scan."""

    def test_long_call(self, long_call):
        """Test a single break-even above the strike."""
        assert find_break_evens([long_call], 100.0) == [105.0]

    def test_bull_put_spread(self, bull_put_legs):
        """Test a credit spread break-even."""
        assert find_break_evens(bull_put_legs, 100.0) == [98.0]

    def test_long_straddle_has_two(self):
        """Test a structure with two break-evens."""
        legs = [
            OptionLeg(CALL, LONG, 100.0, 4.0),
            OptionLeg(PUT, LONG, 100.0, 3.0),
        ]

        assert find_break_evens(legs, 100.0) == [93.0, 107.0]

    def test_iron_condor_has_two(self):
        """Test a four-leg structure."""
        legs = [
            OptionLeg(PUT, LONG, 85.0, 0.5),
            OptionLeg(PUT, SHORT, 90.0, 1.5),
            OptionLeg(CALL, SHORT, 110.0, 1.5),
            OptionLeg(CALL, LONG, 115.0, 0.5),
        ]

        assert find_break_evens(legs, 100.0) == [88.0, 112.0]

    @pytest.mark.parametrize("legs, expected", [
        ([OptionLeg(CALL, LONG, 100.0, 0.08)], [100.08]),
        ([OptionLeg(PUT, LONG, 100.0, 0.01)], [99.99]),
        ([OptionLeg(PUT, SHORT, 100.0, 0.43)], [99.57]),
        ([OptionLeg(CALL, SHORT, 100.0, 0.43), OptionLeg(CALL, LONG, 105.0, 0.35)], [100.08]),
    ])
    def test_zero_on_cent_step_reported_at_that_step(self, legs, expected):
        """Test that float noise does not push an exact break-even to the next cent."""
        assert find_break_evens(legs, 100.0) == expected
        assert analyze_legs(legs, 100.0).break_even_points == expected

    def test_out_of_range_break_even(self):
        """Test that break-evens outside the scan window are not reported."""
        leg = OptionLeg(CALL, LONG, 200.0, 5.0)

        assert find_break_evens([leg], 100.0) == []

    def test_invalid_price(self, long_call):
        """Test that the scan requires a positive price."""
        with pytest.raises(ValidationError):
            find_break_evens([long_call], 0)


class TestAnalyzeLegs:
    """Tests for generic leg analysis."""

    def test_long_call_unbounded_profit(self, long_call):
        """Test unbounded profit detection."""
        metrics = analyze_legs([long_call], 100.0)

        assert isinstance(metrics, StrategyMetrics)
        assert metrics.net_cost == 500.0
        assert metrics.max_profit is UNBOUNDED
        assert metrics.max_loss == 500.0
        assert metrics.break_even_points == [105.0]
        assert metrics.return_on_risk is None

    def test_short_call_unbounded_loss(self):
        """Test unbounded loss detection."""
        metrics = analyze_legs([OptionLeg(CALL, SHORT, 100.0, 5.0)], 100.0)

        assert metrics.max_profit == 500.0
        assert metrics.max_loss is UNBOUNDED

    def test_spread_matches_closed_form(self, bull_put_legs):
        """Test bounded metrics of a credit spread."""
        metrics = analyze_legs(bull_put_legs, 100.0)

        assert metrics.net_cost == -200.0
        assert metrics.max_profit == 200.0
        assert metrics.max_loss == 300.0
        assert metrics.break_even_points == [98.0]

    def test_covered_by_long_call(self):
        """Test that a short call covered by a long call has bounded loss."""
        legs = [
            OptionLeg(CALL, SHORT, 100.0, 3.0),
            OptionLeg(CALL, LONG, 105.0, 1.0),
        ]

        metrics = analyze_legs(legs, 100.0)

        assert metrics.max_profit == 200.0
        assert metrics.max_loss == 300.0

    def test_serialization_uses_none_for_unbounded(self, long_call):
        """Test the transport representation of unbounded values."""
        data = analyze_legs([long_call], 100.0).to_dict()

        assert data["max_profit"] is None
        assert data["max_profit_unbounded"] is True
        assert data["max_loss"] == 500.0
        assert data["max_loss_unbounded"] is False
