"""Analyzer logger implementation with structured logging and credential masking."""
import logging
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

from src.config.models import LoggingConfig


class AnalyzerLogger:
    """Logger for the strategy analyzer with structured logging and credential protection."""

    # Market-data collaborators are configured with API keys; never let them reach a log file
    SENSITIVE_PATTERNS = [
        (re.compile(r'(api[_-]?key["\']?\s*[:=]\s*["\']?)([^"\'}\s]+)', re.IGNORECASE), r'\1***MASKED***'),
        (re.compile(r'(api[_-]?secret["\']?\s*[:=]\s*["\']?)([^"\'}\s]+)', re.IGNORECASE), r'\1***MASKED***'),
        (re.compile(r'(password["\']?\s*[:=]\s*["\']?)([^"\'}\s]+)', re.IGNORECASE), r'\1***MASKED***'),
        (re.compile(r'(token["\']?\s*[:=]\s*["\']?)([^"\'}\s]+)', re.IGNORECASE), r'\1***MASKED***'),
        (re.compile(r'(bearer\s+)([a-zA-Z0-9_\-\.]+)', re.IGNORECASE), r'\1***MASKED***'),
    ]

    def __init__(self, config: LoggingConfig):
        """Initialize the analyzer logger.

        Args:
            config: Logging configuration
        """
        self.config = config
        self.logger = logging.getLogger('StrategyAnalyzer')
        self.logger.setLevel(getattr(logging, config.level.upper()))

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            '[%(asctime)s] [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        log_path = Path(config.file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            config.file_path,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5
        )
        file_handler.setLevel(getattr(logging, config.level.upper()))
        file_handler.setFormatter(formatter)
        self.logger.addHandler(file_handler)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, config.level.upper()))
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

    def _mask_sensitive_data(self, message: str) -> str:
        """Mask sensitive information in log messages.

        Args:
            message: Original log message

        Returns:
            Message with sensitive data masked
        """
        masked_message = message
        for pattern, replacement in self.SENSITIVE_PATTERNS:
            masked_message = pattern.sub(replacement, masked_message)
        return masked_message

    def _format_context(self, context: Optional[Dict[str, Any]]) -> str:
        """Format context dictionary for logging.

        Args:
            context: Context dictionary

        Returns:
            Formatted context string
        """
        if not context:
            return ""

        context_parts = []
        for key, value in context.items():
            if any(sensitive in key.lower() for sensitive in ['key', 'secret', 'password', 'token']):
                value = '***MASKED***'
            context_parts.append(f"{key}={value}")

        return " | " + " | ".join(context_parts) if context_parts else ""

    def log_info(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Log an info message.

        Args:
            message: Log message
            context: Optional context dictionary for structured data
        """
        masked_message = self._mask_sensitive_data(message)
        context_str = self._format_context(context)
        self.logger.info(f"{masked_message}{context_str}")

    def log_warning(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Log a warning message.

        Args:
            message: Log message
            context: Optional context dictionary for structured data
        """
        masked_message = self._mask_sensitive_data(message)
        context_str = self._format_context(context)
        self.logger.warning(f"{masked_message}{context_str}")

    def log_error(self, message: str, error: Optional[Exception] = None,
                  context: Optional[Dict[str, Any]] = None):
        """Log an error message.

        Args:
            message: Log message
            error: Optional exception object
            context: Optional context dictionary for structured data
        """
        masked_message = self._mask_sensitive_data(message)
        context_str = self._format_context(context)

        if error:
            error_info = f" | Error: {type(error).__name__}: {str(error)}"
            self.logger.error(f"{masked_message}{context_str}{error_info}", exc_info=True)
        else:
            self.logger.error(f"{masked_message}{context_str}")

    def log_debug(self, message: str, context: Optional[Dict[str, Any]] = None):
        """Log a debug message.

        Args:
            message: Log message
            context: Optional context dictionary for structured data
        """
        masked_message = self._mask_sensitive_data(message)
        context_str = self._format_context(context)
        self.logger.debug(f"{masked_message}{context_str}")

    def log_analysis(self, analysis: Dict[str, Any]):
        """Log the outcome of a strategy analysis.

        Args:
            analysis: Serialized analysis with keys:
                - strategy_type: Strategy that was analyzed
                - current_price: Underlying price used
                - metrics: Serialized StrategyMetrics (unbounded values are None)
        """
        metrics = analysis.get('metrics', {})
        strategy_type = analysis.get('strategy_type', 'custom')

        max_profit = metrics.get('max_profit')
        max_loss = metrics.get('max_loss')
        break_evens = metrics.get('break_even_points', [])

        message = (
            f"Analysis complete: {strategy_type} | "
            f"Price=${analysis.get('current_price', 0):.2f} | "
            f"Net Cost=${metrics.get('net_cost', 0):.2f} | "
            f"Max Profit={'unbounded' if max_profit is None else f'${max_profit:.2f}'} | "
            f"Max Loss={'unbounded' if max_loss is None else f'${max_loss:.2f}'} | "
            f"Break-even={', '.join(f'${p:.2f}' for p in break_evens) or 'N/A'}"
        )

        if metrics.get('profit_probability') is not None:
            message += f" | POP={metrics['profit_probability']:.2f}%"
        if metrics.get('return_on_risk') is not None:
            message += f" | RoR={metrics['return_on_risk']:.2f}%"

        self.log_info(message)
