"""Market data collaborator interface."""
from .base_client import MarketDataClient, OptionQuote

__all__ = ['MarketDataClient', 'OptionQuote']
