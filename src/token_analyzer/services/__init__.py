"""Service layer for the token analyzer application."""

from token_analyzer.services.preprocessor import SeriesPreprocessor
from token_analyzer.services.volume_profiler import VolumeProfiler
from token_analyzer.services.liquidity_analyzer import LiquidityAnalyzer
from token_analyzer.services.pattern_adapter import PatternPredictionAdapter
from token_analyzer.services.heuristic_model import HeuristicPatternModel
from token_analyzer.services.security_scorer import SecurityScorer
from token_analyzer.services.technical_analysis_service import (
    Subscription,
    TechnicalAnalysisService,
)

__all__ = [
    "SeriesPreprocessor",
    "VolumeProfiler",
    "LiquidityAnalyzer",
    "PatternPredictionAdapter",
    "HeuristicPatternModel",
    "SecurityScorer",
    "Subscription",
    "TechnicalAnalysisService",
]
