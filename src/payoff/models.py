"""Value objects shared by the payoff, strategy and probability calculators."""
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

CALL = 'call'
PUT = 'put'
OPTION_TYPES = (CALL, PUT)

LONG = 'long'
SHORT = 'short'
POSITIONS = (LONG, SHORT)

DEFAULT_SHARES_PER_CONTRACT = 100


class ValidationError(ValueError):
    """Raised when strategy inputs are missing, non-numeric or inconsistent."""


class Unbounded:
    """Sentinel for a profit or loss with no finite limit.

    Serializes to None so that it survives JSON transport.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'UNBOUNDED'

    def __reduce__(self):
        return (Unbounded, ())


UNBOUNDED = Unbounded()

Bound = Union[float, Unbounded]


def is_number(value: Any) -> bool:
    """Return True for finite ints and floats (bool excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


@dataclass(frozen=True)
class OptionLeg:
    """One option position within a strategy.

    Premium is quoted per share; multiply by shares_per_contract for the
    dollar cost of a contract.
    """
    option_type: str  # 'call' or 'put'
    position: str  # 'long' (bought) or 'short' (sold)
    strike_price: float
    premium: float
    quantity: float = 1  # contracts
    shares_per_contract: int = DEFAULT_SHARES_PER_CONTRACT

    def __post_init__(self):
        is_valid, error_message = self.validate()
        if not is_valid:
            raise ValidationError(f"Option leg validation error: {error_message}")

    def validate(self) -> tuple[bool, Optional[str]]:
        """Validate leg fields.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if self.option_type not in OPTION_TYPES:
            return False, f"Option type must be one of {list(OPTION_TYPES)}"
        if self.position not in POSITIONS:
            return False, f"Position must be one of {list(POSITIONS)}"
        if not is_number(self.strike_price):
            return False, "Strike price must be a number"
        if self.strike_price <= 0:
            return False, "Strike price must be positive"
        if not is_number(self.premium):
            return False, "Premium must be a number"
        if self.premium < 0:
            return False, "Premium cannot be negative"
        if not is_number(self.quantity):
            return False, "Quantity must be a number"
        if self.quantity <= 0:
            return False, "Quantity must be positive"
        if not is_number(self.shares_per_contract):
            return False, "Shares per contract must be a number"
        if self.shares_per_contract <= 0:
            return False, "Shares per contract must be positive"
        return True, None

    @property
    def total_shares(self) -> float:
        """Number of shares the leg controls."""
        return self.quantity * self.shares_per_contract

    @property
    def is_long(self) -> bool:
        return self.position == LONG

    def to_dict(self) -> Dict[str, Any]:
        return {
            'option_type': self.option_type,
            'position': self.position,
            'strike_price': self.strike_price,
            'premium': self.premium,
            'quantity': self.quantity,
            'shares_per_contract': self.shares_per_contract,
        }


@dataclass(frozen=True)
class ProfitLossPoint:
    """P&L of a strategy at one hypothetical terminal price."""
    stock_price: float
    profit_loss: float

    def to_dict(self) -> Dict[str, float]:
        return {'stock_price': self.stock_price, 'profit_loss': self.profit_loss}


def _serialize_bound(value: Bound) -> Optional[float]:
    return None if value is UNBOUNDED else value


@dataclass
class StrategyMetrics:
    """Summary risk metrics of a strategy.

    max_loss is a positive magnitude. max_profit and max_loss may be
    UNBOUNDED.
    """
    net_cost: float  # positive for a debit, negative for a credit
    max_profit: Bound
    max_loss: Bound
    break_even_points: List[float] = field(default_factory=list)
    profit_probability: Optional[float] = None  # percent, 0-100
    return_on_risk: Optional[float] = None  # percent

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for transport; unbounded values become None."""
        return {
            'net_cost': self.net_cost,
            'max_profit': _serialize_bound(self.max_profit),
            'max_loss': _serialize_bound(self.max_loss),
            'max_profit_unbounded': self.max_profit is UNBOUNDED,
            'max_loss_unbounded': self.max_loss is UNBOUNDED,
            'break_even_points': list(self.break_even_points),
            'profit_probability': self.profit_probability,
            'return_on_risk': self.return_on_risk,
        }
