"""Pytest configuration and fixtures."""

from datetime import datetime, timezone
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest

from token_analyzer.config.settings import Settings
from token_analyzer.models.market_data import HistoricalDataPoint
from token_analyzer.services.technical_analysis_service import TechnicalAnalysisService


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        log_level="DEBUG",
        subscription_interval_seconds=0.01,
    )


@pytest.fixture
def sample_series() -> List[Dict[str, Any]]:
    """Four-point series with a higher close than open."""
    return [
        {"timestamp": 1000, "price": 100, "volume": 1000},
        {"timestamp": 2000, "price": 110, "volume": 1500},
        {"timestamp": 3000, "price": 105, "volume": 1200},
        {"timestamp": 4000, "price": 115, "volume": 2000},
    ]


@pytest.fixture
def sample_depth() -> Dict[str, float]:
    """Liquidity depth matching the sample series."""
    return {"100": 1000, "110": 1500, "105": 1200}


@pytest.fixture
def hourly_series() -> List[HistoricalDataPoint]:
    """Three days of hourly points starting 2024-01-01 UTC with a mild uptrend."""
    start = int(datetime(2024, 1, 1, tzinfo=timezone.utc).timestamp() * 1000)
    data = []
    for i in range(72):
        price = 100 + (i * 0.1) + (i % 5 - 2) * 0.4
        volume = 1000 + (i % 10) * 150
        data.append(
            HistoricalDataPoint(
                timestamp=start + i * 3600 * 1000,
                price=price,
                volume=volume,
            )
        )
    return data


@pytest.fixture
def mock_provider(sample_series, sample_depth) -> MagicMock:
    """Historical data provider returning the sample data."""
    provider = MagicMock()
    provider.fetch = AsyncMock(return_value=sample_series)
    provider.get_liquidity = AsyncMock(return_value=sample_depth)
    return provider


@pytest.fixture
def mock_model() -> MagicMock:
    """Pattern/prediction model returning camelCase payloads."""
    model = MagicMock()
    model.predict = AsyncMock(return_value={
        "predictedPrice": 120,
        "confidence": 0.8,
        "timeframe": "24h",
        "supportingFactors": ["uptrend", "high volume"],
    })
    model.detect_patterns = AsyncMock(return_value=[
        {
            "pattern": "bullish_flag",
            "confidence": 0.9,
            "priceTargets": {"entry": 115, "target": 130, "stopLoss": 105},
            "timeframe": "24h",
        }
    ])
    return model


@pytest.fixture
def analysis_service(
    test_settings: Settings,
    mock_provider: MagicMock,
    mock_model: MagicMock
) -> TechnicalAnalysisService:
    """Create technical analysis service for testing."""
    return TechnicalAnalysisService(test_settings, mock_provider, mock_model)
