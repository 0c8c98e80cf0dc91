"""Data models and schemas for the token analyzer service."""

from token_analyzer.models.market_data import HistoricalDataPoint
from token_analyzer.models.analysis import (
    TrendDirection,
    ZoneType,
    ValueArea,
    VolumeZone,
    VolumeAnalysis,
    LiquidityData,
    PriceTargets,
    PatternData,
    PredictionMetrics,
    MacdData,
    MomentumData,
    VolatilityMetrics,
    TrendAnalysis,
    TechnicalAnalysisData,
)
from token_analyzer.models.risk import (
    Severity,
    SecurityIssue,
    AuditInfo,
    SecurityAssessment,
)

__all__ = [
    "HistoricalDataPoint",
    "TrendDirection",
    "ZoneType",
    "ValueArea",
    "VolumeZone",
    "VolumeAnalysis",
    "LiquidityData",
    "PriceTargets",
    "PatternData",
    "PredictionMetrics",
    "MacdData",
    "MomentumData",
    "VolatilityMetrics",
    "TrendAnalysis",
    "TechnicalAnalysisData",
    "Severity",
    "SecurityIssue",
    "AuditInfo",
    "SecurityAssessment",
]
