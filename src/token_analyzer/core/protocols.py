"""
Collaborator interfaces consumed by the technical metrics engine.
Concrete providers and models are injected into the service at construction.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Sequence, Union

from token_analyzer.models.market_data import HistoricalDataPoint
from token_analyzer.models.analysis import PatternData, PredictionMetrics


SeriesInput = Sequence[Union[HistoricalDataPoint, Mapping[str, Any]]]


class HistoricalDataProvider(ABC):
    """Interface for historical price/volume and liquidity depth access."""

    @abstractmethod
    async def fetch(self, identifier: str) -> SeriesInput:
        """Fetch the time-ordered price/volume series for a token or collection."""
        pass

    @abstractmethod
    async def get_liquidity(self, identifier: str) -> Dict[str, float]:
        """Fetch the liquidity depth map (price level -> available volume)."""
        pass


class PatternPredictionModel(ABC):
    """Interface for pattern detection and price prediction backends."""

    @abstractmethod
    async def detect_patterns(
        self, series: List[HistoricalDataPoint]
    ) -> List[Union[PatternData, Mapping[str, Any]]]:
        """Detect chart patterns in the series."""
        pass

    @abstractmethod
    async def predict(
        self, series: List[HistoricalDataPoint]
    ) -> Union[PredictionMetrics, Mapping[str, Any]]:
        """Predict the next price for the series."""
        pass
