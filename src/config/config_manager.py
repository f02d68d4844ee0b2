"""Configuration manager for loading and validating configuration."""
import json
import os
import re
from typing import Any, Dict
from .models import Config, LoggingConfig


class ConfigManager:
    """Manages loading and validation of configuration."""

    def __init__(self):
        """Initialize the ConfigManager."""
        self._config: Config = None

    def load_config(self, config_path: str) -> Config:
        """Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Config object with loaded configuration

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
            json.JSONDecodeError: If JSON is malformed
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(
                f"Configuration file not found: {config_path}\n"
                f"Please create a configuration file at this location."
            )

        try:
            with open(config_path, 'r') as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise json.JSONDecodeError(
                f"Invalid JSON format in configuration file: {e.msg}",
                e.doc,
                e.pos
            )

        return self.load_config_data(config_data)

    def load_config_data(self, config_data: Dict[str, Any]) -> Config:
        """Build configuration from an already parsed dictionary.

        Args:
            config_data: Raw configuration values

        Returns:
            Validated Config object

        Raises:
            ValueError: If config is invalid
        """
        config_data = self._substitute_env_vars(config_data)

        logging_data = config_data.get('logging', {})
        logging_config = LoggingConfig(
            level=logging_data.get('level', 'INFO'),
            file_path=logging_data.get('file_path', 'logs/strategy_analyzer.log')
        )

        # Values substituted from the environment arrive as strings
        try:
            config = Config(
                risk_free_rate=float(config_data.get('risk_free_rate', 0.05)),
                shares_per_contract=int(config_data.get('shares_per_contract', 100)),
                curve_range=float(config_data.get('curve_range', 0.5)),
                logging_config=logging_config
            )
        except (ValueError, TypeError) as e:
            raise ValueError(
                f"Invalid configuration value type: {e}\n"
                f"Please check that numeric values are numbers and other values are correct types."
            )

        if not self.validate_config(config):
            raise ValueError("Configuration validation failed")

        self._config = config
        return config

    def _substitute_env_vars(self, data):
        """Recursively substitute environment variables in configuration data.

        Environment variables should be in the format ${VAR_NAME}.

        Args:
            data: Configuration data (dict, list, or string)

        Returns:
            Data with environment variables substituted
        """
        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]
        elif isinstance(data, str):
            pattern = r'\$\{([^}]+)\}'
            matches = re.findall(pattern, data)
            result = data
            for var_name in matches:
                env_value = os.environ.get(var_name, '')
                result = result.replace(f'${{{var_name}}}', env_value)
            return result
        else:
            return data

    def validate_config(self, config: Config) -> bool:
        """Validate the configuration.

        Args:
            config: Config object to validate

        Returns:
            True if valid

        Raises:
            ValueError: If validation fails with error message
        """
        is_valid, error_message = config.validate()
        if not is_valid:
            raise ValueError(f"Configuration validation error: {error_message}")
        return True

    def get_risk_free_rate(self) -> float:
        """Get the annual risk-free rate.

        Returns:
            Risk-free rate as a decimal
        """
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load_config first.")
        return self._config.risk_free_rate

    def get_shares_per_contract(self) -> int:
        """Get the contract multiplier.

        Returns:
            Shares per contract
        """
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load_config first.")
        return self._config.shares_per_contract

    def get_curve_range(self) -> float:
        """Get the price range sampled by the P&L curve.

        Returns:
            Curve range as a fraction of the current price
        """
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load_config first.")
        return self._config.curve_range

    def get_logging_config(self) -> LoggingConfig:
        """Get logging configuration.

        Returns:
            LoggingConfig object
        """
        if self._config is None:
            raise RuntimeError("Configuration not loaded. Call load_config first.")
        return self._config.logging_config
