"""Strategy analysis orchestration module."""
from .strategy_analyzer import AnalysisResult, StrategyAnalyzer

__all__ = ['AnalysisResult', 'StrategyAnalyzer']
