"""Strategy analysis orchestration for the request-handling layer."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from src.config.config_manager import ConfigManager
from src.config.models import Config
from src.logging.analyzer_logger import AnalyzerLogger
from src.market_data.base_client import MarketDataClient, OptionQuote
from src.payoff.models import OptionLeg, ProfitLossPoint, StrategyMetrics, ValidationError
from src.payoff.payoff_calculator import analyze_legs, generate_curve
from src.probability.probability_calculator import ProbabilityResult, estimate_probability
from src.strategy.strategy_calculator import StrategyCalculator
from src.strategy.strategy_inputs import LegInputs

CUSTOM_STRATEGY = "custom"


@dataclass
class AnalysisResult:
    """Metrics and P&L curve of one analyzed strategy."""

    strategy_type: str
    current_price: float
    metrics: StrategyMetrics
    legs: List[OptionLeg]
    curve: List[ProfitLossPoint] = field(default_factory=list)
    symbol: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for transport; unbounded profit/loss become None."""
        return {
            "strategy_type": self.strategy_type,
            "symbol": self.symbol,
            "current_price": self.current_price,
            "metrics": self.metrics.to_dict(),
            "legs": [leg.to_dict() for leg in self.legs],
            "curve": [point.to_dict() for point in self.curve],
        }


class StrategyAnalyzer:
    """Wires configuration, logging, calculators and an optional market-data client."""

    def __init__(
        self,
        config_path: Optional[str] = None,
        market_data_client: Optional[MarketDataClient] = None,
    ):
        """Initialize the StrategyAnalyzer.

        Args:
            config_path: Path to a JSON configuration file (defaults are used if None)
            market_data_client: Optional client used to look up prices and quotes
        """
        self.config_path = config_path
        self.market_data_client = market_data_client
        self.config: Optional[Config] = None
        self.config_manager: Optional[ConfigManager] = None
        self.logger: Optional[AnalyzerLogger] = None
        self.strategy_calculator: Optional[StrategyCalculator] = None
        self._initialized = False

    def initialize(self) -> bool:
        """Load configuration and build the logger and calculators.

        Returns:
            True if initialization successful, False otherwise
        """
        try:
            self.config_manager = ConfigManager()
            if self.config_path:
                self.config = self.config_manager.load_config(self.config_path)
            else:
                self.config = self.config_manager.load_config_data({})

            self.logger = AnalyzerLogger(self.config_manager.get_logging_config())
            self.logger.log_info(
                "Strategy analyzer initialization started",
                {"config_path": self.config_path or "<defaults>"},
            )

            self.strategy_calculator = StrategyCalculator(self.config, self.logger)

            self._initialized = True
            self.logger.log_info(
                "Strategy analyzer initialization complete",
                {
                    "risk_free_rate": self.config_manager.get_risk_free_rate(),
                    "shares_per_contract": self.config_manager.get_shares_per_contract(),
                    "curve_range": self.config_manager.get_curve_range(),
                    "market_data": type(self.market_data_client).__name__
                    if self.market_data_client else "none",
                },
            )
            return True

        except FileNotFoundError as e:
            print(f"ERROR: Configuration file not found: {str(e)}")
            return False

        except ValueError as e:
            print(f"ERROR: Configuration validation error: {str(e)}")
            return False

    def _require_initialized(self):
        if not self._initialized:
            raise RuntimeError("Strategy analyzer not initialized. Call initialize() first.")

    def resolve_current_price(self, current_price: Optional[float] = None,
                              symbol: Optional[str] = None) -> float:
        """Return the explicit price, or look it up through the market-data client.

        Raises:
            ValidationError: If no price is given and it cannot be looked up
        """
        self._require_initialized()
        if current_price is not None:
            return current_price

        if not symbol:
            raise ValidationError("Either current_price or symbol is required")
        if self.market_data_client is None:
            raise ValidationError(
                f"No market data client configured to look up price for {symbol}"
            )

        self.logger.log_info(f"Fetching current price for {symbol}")
        price = self.market_data_client.get_current_price(symbol)
        self.logger.log_info(
            f"Current price for {symbol}: ${price:.2f}",
            {"symbol": symbol, "price": price},
        )
        return price

    def analyze_strategy(
        self,
        strategy_type: str,
        leg_inputs: LegInputs,
        quantity: float = 1,
        current_price: Optional[float] = None,
        symbol: Optional[str] = None,
        implied_volatility: Optional[float] = None,
        days_to_expiration: Optional[float] = None,
        include_curve: bool = True,
    ) -> AnalysisResult:
        """Analyze one of the supported strategy types.

        Metrics come from the closed-form calculator; the curve is sampled
        separately from the legs the strategy represents.

        Raises:
            RuntimeError: If analyzer is not initialized
            ValidationError: If inputs are invalid
        """
        self._require_initialized()

        try:
            price = self.resolve_current_price(current_price, symbol)
            metrics = self.strategy_calculator.compute_metrics(
                strategy_type=strategy_type,
                current_price=price,
                leg_inputs=leg_inputs,
                quantity=quantity,
                implied_volatility=implied_volatility,
                days_to_expiration=days_to_expiration,
            )
            legs = list(self.strategy_calculator.build_legs(strategy_type, leg_inputs, quantity))
            curve = []
            if include_curve:
                curve = generate_curve(legs, price, self.config_manager.get_curve_range())
        except ValidationError as e:
            self.logger.log_error(
                f"Invalid {strategy_type} request: {str(e)}",
                context={"strategy_type": strategy_type, "symbol": symbol},
            )
            raise

        result = AnalysisResult(
            strategy_type=strategy_type,
            current_price=price,
            metrics=metrics,
            legs=legs,
            curve=curve,
            symbol=symbol,
        )
        self.logger.log_analysis(result.to_dict())
        return result

    def analyze_legs(
        self,
        legs: Sequence[OptionLeg],
        current_price: Optional[float] = None,
        symbol: Optional[str] = None,
        include_curve: bool = True,
    ) -> AnalysisResult:
        """Analyze an arbitrary leg combination with the generic scan.

        Raises:
            RuntimeError: If analyzer is not initialized
            ValidationError: If inputs are invalid
        """
        self._require_initialized()

        try:
            price = self.resolve_current_price(current_price, symbol)
            metrics = analyze_legs(legs, price)
            curve = []
            if include_curve:
                curve = generate_curve(legs, price, self.config_manager.get_curve_range())
        except ValidationError as e:
            self.logger.log_error(
                f"Invalid custom strategy request: {str(e)}",
                context={"legs": len(legs) if legs else 0, "symbol": symbol},
            )
            raise

        result = AnalysisResult(
            strategy_type=CUSTOM_STRATEGY,
            current_price=price,
            metrics=metrics,
            legs=list(legs),
            curve=curve,
            symbol=symbol,
        )
        self.logger.log_analysis(result.to_dict())
        return result

    def estimate_probability(
        self,
        stock_price: float,
        strike_price: float,
        days_to_expiration: float,
        implied_volatility: float,
        option_type: str,
        risk_free_rate: Optional[float] = None,
    ) -> ProbabilityResult:
        """Black-Scholes ITM/OTM probability using the configured risk-free rate by default."""
        self._require_initialized()
        rate = self.config_manager.get_risk_free_rate() if risk_free_rate is None else risk_free_rate
        return estimate_probability(
            stock_price=stock_price,
            strike_price=strike_price,
            days_to_expiration=days_to_expiration,
            implied_volatility=implied_volatility,
            option_type=option_type,
            risk_free_rate=rate,
        )

    def get_option_quote(self, symbol: str, expiration: date, option_type: str,
                         strike: float) -> Optional[OptionQuote]:
        """Look up an option quote through the market-data client.

        Raises:
            RuntimeError: If analyzer is not initialized or no client is configured
        """
        self._require_initialized()
        if self.market_data_client is None:
            raise RuntimeError("No market data client configured")

        quote = self.market_data_client.get_option_quote(symbol, expiration, option_type, strike)
        if quote is None:
            self.logger.log_warning(
                f"No quote found for {symbol} {option_type} ${strike:.2f}",
                {"symbol": symbol, "expiration": expiration.isoformat()},
            )
        return quote

    def shutdown(self):
        """Flush log buffers and release the market-data client."""
        if self.logger:
            self.logger.log_info("Strategy analyzer shutdown")
            for handler in self.logger.logger.handlers:
                handler.flush()
        self.market_data_client = None
        self._initialized = False
