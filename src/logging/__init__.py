"""Logging module."""
from .analyzer_logger import AnalyzerLogger

__all__ = ['AnalyzerLogger']
