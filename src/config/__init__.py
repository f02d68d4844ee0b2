"""Configuration management module."""
from .models import Config, LoggingConfig
from .config_manager import ConfigManager

__all__ = ['Config', 'LoggingConfig', 'ConfigManager']
