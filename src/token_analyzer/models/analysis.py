"""Analysis models and schemas for the technical metrics engine."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AnalysisModel(BaseModel):
    """Base for immutable analysis records serialized with camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class TrendDirection(str, Enum):
    """Trend direction enumeration."""
    BULLISH = "bullish"
    BEARISH = "bearish"
    SIDEWAYS = "sideways"


class ZoneType(str, Enum):
    """Volume zone classification."""
    ACCUMULATION = "accumulation"
    DISTRIBUTION = "distribution"


class ValueArea(AnalysisModel):
    """Price levels holding the bulk of traded volume."""

    high: float = Field(default=0.0, description="Highest price level in the value area")
    low: float = Field(default=0.0, description="Lowest price level in the value area")
    value: float = Field(default=0.0, description="Mean price level of the value area")


class VolumeZone(AnalysisModel):
    """Window of abnormal volume with a directional price move."""

    price: float = Field(description="Average price over the window")
    volume: float = Field(description="Total volume over the window")
    type: ZoneType = Field(description="Accumulation or distribution")


class VolumeAnalysis(AnalysisModel):
    """Volume profile, value area and accumulation/distribution zones."""

    volume_profile: Dict[str, float] = Field(
        default_factory=dict,
        description="Volume per price level (price rounded to 2 decimals)"
    )
    value_areas: ValueArea = Field(
        default_factory=ValueArea,
        description="Value area covering the configured share of volume"
    )
    volume_zones: List[VolumeZone] = Field(
        default_factory=list,
        description="Detected accumulation/distribution zones"
    )


class LiquidityData(AnalysisModel):
    """Liquidity depth statistics."""

    depth: Dict[str, float] = Field(
        default_factory=dict,
        description="Available volume per price level"
    )
    concentration: float = Field(
        default=0.0, ge=0, le=1,
        description="Herfindahl index of depth, normalized to [0, 1]"
    )
    imbalance: float = Field(
        default=0.0, ge=0, le=1,
        description="Absolute difference between depth halves over total depth"
    )
    efficiency: float = Field(
        default=0.0, ge=0, le=1,
        description="1 - concentration"
    )

    @classmethod
    def zero(cls, depth: Optional[Dict[str, float]] = None) -> "LiquidityData":
        """Zero-valued liquidity record used when depth is unavailable."""
        return cls(depth=dict(depth or {}))


class PriceTargets(AnalysisModel):
    """Entry, target and stop-loss levels attached to a pattern."""

    entry: float = Field(default=0.0, description="Entry price")
    target: float = Field(default=0.0, description="Target price")
    stop_loss: float = Field(default=0.0, description="Stop-loss price")


class PatternData(AnalysisModel):
    """Chart pattern reported by the pattern detection model."""

    pattern: str = Field(description="Pattern name")
    confidence: float = Field(ge=0, le=1, description="Detection confidence")
    price_targets: PriceTargets = Field(
        default_factory=PriceTargets,
        description="Trading levels implied by the pattern"
    )
    timeframe: str = Field(default="24h", description="Horizon of the pattern")


class PredictionMetrics(AnalysisModel):
    """Price prediction reported by the prediction model."""

    predicted_price: float = Field(description="Predicted price")
    confidence: float = Field(ge=0, le=1, description="Prediction confidence")
    timeframe: str = Field(default="24h", description="Prediction horizon")
    supporting_factors: List[str] = Field(
        default_factory=list,
        description="Factors supporting the prediction"
    )


class MacdData(AnalysisModel):
    """Moving Average Convergence Divergence snapshot."""

    value: float = Field(default=0.0, description="MACD line (fast EMA - slow EMA)")
    signal: float = Field(default=0.0, description="Signal line (EMA of MACD line)")
    histogram: float = Field(default=0.0, description="MACD line - signal line")


class MomentumData(AnalysisModel):
    """Momentum oscillators."""

    rsi: float = Field(ge=0, le=100, description="Relative Strength Index")
    macd: MacdData = Field(description="MACD snapshot")
    momentum: float = Field(description="Rate of change in percent")


class VolatilityMetrics(AnalysisModel):
    """Volatility statistics derived from log returns."""

    historical_volatility: float = Field(
        description="Annualized standard deviation of log returns (percent)"
    )
    implied_volatility: float = Field(
        description="Heuristic implied volatility"
    )
    volatility_index: float = Field(
        description="Historical volatility scaled to 30 days"
    )
    volatility_skew: float = Field(
        description="Skewness of log returns"
    )


class TrendAnalysis(AnalysisModel):
    """Trend direction, strength and pivot levels."""

    direction: TrendDirection = Field(description="Moving average trend direction")
    strength: float = Field(ge=0, description="Mean absolute price change")
    support: List[float] = Field(default_factory=list, description="Support pivots")
    resistance: List[float] = Field(default_factory=list, description="Resistance pivots")


class TechnicalAnalysisData(AnalysisModel):
    """Complete technical analysis bundle for one identifier."""

    identifier: str = Field(description="Token contract or collection identifier")
    as_of: int = Field(description="Timestamp of the latest analyzed point (epoch ms)")
    data_points: int = Field(ge=1, description="Number of analyzed points")

    volume: VolumeAnalysis
    liquidity: LiquidityData
    patterns: List[PatternData]
    predictions: PredictionMetrics
    momentum: MomentumData
    volatility: VolatilityMetrics
    trend: TrendAnalysis
