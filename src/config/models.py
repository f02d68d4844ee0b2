"""Data models for configuration."""
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str
    file_path: str

    def validate(self) -> tuple[bool, Optional[str]]:
        """Validate logging configuration.

        Returns:
            Tuple of (is_valid, error_message)
        """
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if self.level.upper() not in valid_levels:
            return False, f"Log level must be one of {valid_levels}"
        if not self.file_path or not self.file_path.strip():
            return False, "Log file path is required"
        return True, None


@dataclass
class Config:
    """Main configuration for the strategy analyzer."""
    risk_free_rate: float = 0.05  # Annual rate used by the Black-Scholes estimator
    shares_per_contract: int = 100  # Contract multiplier
    curve_range: float = 0.5  # +/- fraction of current price sampled by the P&L curve
    logging_config: LoggingConfig = field(
        default_factory=lambda: LoggingConfig(level='INFO', file_path='logs/strategy_analyzer.log')
    )

    def validate(self) -> tuple[bool, Optional[str]]:
        """Validate the entire configuration.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if self.risk_free_rate < 0:
            return False, "Risk-free rate cannot be negative"
        if self.risk_free_rate > 1:
            return False, "Risk-free rate must be a decimal (e.g. 0.05 for 5%)"

        if not isinstance(self.shares_per_contract, int):
            return False, "Shares per contract must be an integer"
        if self.shares_per_contract <= 0:
            return False, "Shares per contract must be positive"

        if self.curve_range <= 0 or self.curve_range > 1:
            return False, "Curve range must be between 0 and 1"

        is_valid, error = self.logging_config.validate()
        if not is_valid:
            return False, f"Logging config error: {error}"

        return True, None
