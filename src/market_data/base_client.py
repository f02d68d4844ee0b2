"""Base client interface for market-data providers.

The analyzer receives a concrete client by injection; the payoff, strategy
and probability calculators never touch one.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class OptionQuote:
    """Quote snapshot for a single option contract (prices are per share)."""
    symbol: str
    strike: float
    expiration: date
    option_type: str  # 'put' or 'call'
    bid: Optional[float] = None
    ask: Optional[float] = None
    last: Optional[float] = None
    midpoint: Optional[float] = None
    implied_volatility: Optional[float] = None
    open_interest: Optional[int] = None

    @property
    def premium(self) -> Optional[float]:
        """Best available premium: midpoint, then bid/ask mid, then last trade."""
        if self.midpoint is not None:
            return self.midpoint
        if self.bid is not None and self.ask is not None:
            return (self.bid + self.ask) / 2
        return self.last


class MarketDataClient(ABC):
    """Abstract base class for quote and option chain lookups."""

    @abstractmethod
    def get_current_price(self, symbol: str) -> float:
        """Get the current market price for a symbol.

        Args:
            symbol: Stock symbol

        Returns:
            Current price as float
        """
        pass

    @abstractmethod
    def get_option_quote(self, symbol: str, expiration: date, option_type: str,
                         strike: float) -> Optional[OptionQuote]:
        """Get the quote for one option contract.

        Args:
            symbol: Underlying stock symbol
            expiration: Option expiration date
            option_type: 'call' or 'put'
            strike: Strike price

        Returns:
            OptionQuote, or None if the contract is not listed
        """
        pass
