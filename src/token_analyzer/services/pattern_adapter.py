"""Adapter around the injected pattern detection and prediction model."""

from typing import Any, List, Sequence

from loguru import logger

from token_analyzer.config.settings import Settings
from token_analyzer.models.analysis import PatternData, PredictionMetrics
from token_analyzer.models.market_data import HistoricalDataPoint
from token_analyzer.utils.helpers import resolve_awaitable

INSUFFICIENT_DATA_FACTOR = "insufficient data"


class PatternPredictionAdapter:
    """Delegates to a pattern/prediction model and degrades softly on failure."""

    def __init__(self, model: Any, settings: Settings) -> None:
        """Initialize the adapter with the injected model."""
        self.model = model
        self.settings = settings

    async def detect_patterns(
        self, series: List[HistoricalDataPoint]
    ) -> List[PatternData]:
        """
        Detect patterns through the model.

        Returns:
            Detected patterns; empty when the model fails
        """
        try:
            raw_patterns = await resolve_awaitable(self.model.detect_patterns(series))
            return [
                pattern if isinstance(pattern, PatternData)
                else PatternData.model_validate(pattern)
                for pattern in (raw_patterns or [])
            ]
        except Exception as e:
            logger.warning(f"Pattern detection failed, returning no patterns: {e}")
            return []

    async def predict(self, series: List[HistoricalDataPoint]) -> PredictionMetrics:
        """
        Predict the next price through the model.

        Returns:
            Model prediction; the last observed price with zero confidence when
            the model fails
        """
        try:
            raw_prediction = await resolve_awaitable(self.model.predict(series))
            if isinstance(raw_prediction, PredictionMetrics):
                return raw_prediction
            return PredictionMetrics.model_validate(raw_prediction)
        except Exception as e:
            logger.warning(f"Prediction failed, using last observed price: {e}")
            return self.degraded_prediction(series)

    def degraded_prediction(
        self, series: Sequence[HistoricalDataPoint]
    ) -> PredictionMetrics:
        """Placeholder prediction built from the last observed price."""
        last_price = series[-1].price if series else 0.0
        return PredictionMetrics(
            predicted_price=last_price,
            confidence=0.0,
            timeframe=self.settings.prediction_timeframe,
            supporting_factors=[INSUFFICIENT_DATA_FACTOR],
        )
