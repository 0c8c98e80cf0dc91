"""
Token Analyzer - technical metrics engine for the token and NFT analyzer dashboard.

Combines volume profiling, liquidity depth statistics, momentum, volatility and
trend indicators with an injected pattern/prediction model into one analysis.
"""

__version__ = "0.1.0"

from token_analyzer.core.exceptions import (
    TokenAnalyzerError,
    DataError,
    EmptyDataError,
    NoHistoricalDataError,
    AnalysisError,
    TechnicalAnalysisFailedError,
)

__all__ = [
    "__version__",
    "TokenAnalyzerError",
    "DataError",
    "EmptyDataError",
    "NoHistoricalDataError",
    "AnalysisError",
    "TechnicalAnalysisFailedError",
]
