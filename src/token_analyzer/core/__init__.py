"""Core functionality for the token analyzer service."""

from token_analyzer.core.exceptions import (
    TokenAnalyzerError,
    DataError,
    EmptyDataError,
    NoHistoricalDataError,
    AnalysisError,
    TechnicalAnalysisFailedError,
)
from token_analyzer.core.protocols import (
    HistoricalDataProvider,
    PatternPredictionModel,
)

__all__ = [
    "TokenAnalyzerError",
    "DataError",
    "EmptyDataError",
    "NoHistoricalDataError",
    "AnalysisError",
    "TechnicalAnalysisFailedError",
    "HistoricalDataProvider",
    "PatternPredictionModel",
]
