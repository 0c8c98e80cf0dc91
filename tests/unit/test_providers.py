"""Unit tests for historical data providers."""

import json

import pytest

from token_analyzer.config.settings import Settings
from token_analyzer.core.exceptions import (
    ConfigurationError,
    DataError,
    ExternalServiceError,
    NoHistoricalDataError,
)
from token_analyzer.models.analysis import LiquidityData
from token_analyzer.providers.file_provider import JsonFileDataProvider
from token_analyzer.providers.memory_provider import InMemoryDataProvider
from token_analyzer.services.technical_analysis_service import TechnicalAnalysisService


@pytest.fixture
def data_dir(tmp_path, sample_series, sample_depth):
    """Directory holding one complete and one malformed data file."""
    (tmp_path / "0xtoken.json").write_text(
        json.dumps({"series": sample_series, "depth": sample_depth})
    )
    (tmp_path / "0xbroken.json").write_text("{not json")
    (tmp_path / "0xlist.json").write_text("[1, 2, 3]")
    (tmp_path / "0xnodepth.json").write_text(json.dumps({"series": sample_series}))
    return tmp_path


class TestInMemoryDataProvider:
    """Test the in-memory provider."""

    @pytest.mark.asyncio
    async def test_fetch_and_liquidity(self, sample_series, sample_depth):
        """Test registered data is served back."""
        provider = InMemoryDataProvider({"0xtoken": sample_series}, {"0xtoken": sample_depth})

        assert await provider.fetch("0xtoken") == sample_series
        assert await provider.get_liquidity("0xtoken") == sample_depth

    @pytest.mark.asyncio
    async def test_unknown_identifier(self):
        """Test unknown identifiers."""
        provider = InMemoryDataProvider()

        assert await provider.fetch("0xmissing") == []
        with pytest.raises(DataError):
            await provider.get_liquidity("0xmissing")

    @pytest.mark.asyncio
    async def test_add_series_replaces(self, sample_series):
        """Test series registration after construction."""
        provider = InMemoryDataProvider()

        provider.add_series("0xtoken", sample_series)
        provider.add_series("0xtoken", sample_series[:2])
        provider.add_depth("0xtoken", {"1": 2.0})

        assert len(await provider.fetch("0xtoken")) == 2
        assert await provider.get_liquidity("0xtoken") == {"1": 2.0}

    @pytest.mark.asyncio
    async def test_service_end_to_end(self, sample_series):
        """Test the default model and a provider without depth."""
        provider = InMemoryDataProvider({"0xtoken": sample_series})
        service = TechnicalAnalysisService(Settings(), provider)

        result = await service.analyze("0xtoken")

        assert result.data_points == 4
        assert result.liquidity == LiquidityData.zero()
        # Four points are too few for regression channels or pivots
        assert result.patterns == []
        assert result.predictions.predicted_price >= 0

        with pytest.raises(NoHistoricalDataError):
            await service.analyze("0xmissing")


class TestJsonFileDataProvider:
    """Test the JSON document provider."""

    @pytest.mark.asyncio
    async def test_reads_document(self, data_dir, sample_series, sample_depth):
        """Test series and depth are read from the identifier's file."""
        provider = JsonFileDataProvider(data_dir)

        assert provider.path_for("0xtoken") == data_dir / "0xtoken.json"
        assert await provider.fetch("0xtoken") == sample_series
        assert await provider.get_liquidity("0xtoken") == sample_depth

    @pytest.mark.asyncio
    async def test_invalid_documents(self, data_dir):
        """Test missing, malformed and incomplete documents."""
        provider = JsonFileDataProvider(data_dir)

        for identifier in ("0xmissing", "0xbroken", "0xlist"):
            with pytest.raises(DataError):
                await provider.fetch(identifier)

        with pytest.raises(DataError):
            await provider.get_liquidity("0xnodepth")

    def test_missing_directory(self, tmp_path):
        """Test a data directory that does not exist is a configuration error."""
        with pytest.raises(ConfigurationError):
            JsonFileDataProvider(tmp_path / "nowhere")

    @pytest.mark.asyncio
    async def test_unreadable_document(self, data_dir):
        """Test I/O failures other than a missing file."""
        (data_dir / "0xfolder.json").mkdir()
        provider = JsonFileDataProvider(data_dir)

        with pytest.raises(ExternalServiceError) as exc_info:
            await provider.fetch("0xfolder")

        assert isinstance(exc_info.value.__cause__, OSError)

    @pytest.mark.asyncio
    async def test_service_with_file_provider(self, data_dir, test_settings):
        """Test analysis backed by a data file."""
        service = TechnicalAnalysisService(test_settings, JsonFileDataProvider(data_dir))

        result = await service.analyze("0xtoken")
        assert result.liquidity.depth == {"100": 1000.0, "110": 1500.0, "105": 1200.0}

        no_depth = await service.analyze("0xnodepth")
        assert no_depth.liquidity == LiquidityData.zero()

        with pytest.raises(NoHistoricalDataError):
            await service.analyze("0xbroken")
