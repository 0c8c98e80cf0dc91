"""Historical data provider reading JSON documents from a directory."""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List, Union

from loguru import logger

from token_analyzer.core.exceptions import (
    ConfigurationError,
    DataError,
    ExternalServiceError,
)
from token_analyzer.core.protocols import HistoricalDataProvider


class JsonFileDataProvider(HistoricalDataProvider):
    """
    Reads ``<identifier>.json`` documents shaped as
    ``{"series": [{"timestamp", "price", "volume"}, ...], "depth": {level: volume}}``.
    """

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)
        if not self.directory.is_dir():
            raise ConfigurationError(f"Data directory does not exist: {self.directory}")

    def path_for(self, identifier: str) -> Path:
        """Path of the document holding an identifier's data."""
        return self.directory / f"{identifier}.json"

    async def fetch(self, identifier: str) -> List[Dict[str, Any]]:
        """Read the series of an identifier."""
        document = await self._load(identifier)
        series = document.get("series", [])
        if not isinstance(series, list):
            raise DataError(f"'series' in {self.path_for(identifier)} must be a list")
        return series

    async def get_liquidity(self, identifier: str) -> Dict[str, float]:
        """Read the depth map of an identifier."""
        document = await self._load(identifier)
        depth = document.get("depth")
        if not isinstance(depth, dict):
            raise DataError(f"No liquidity depth in {self.path_for(identifier)}")
        return depth

    async def _load(self, identifier: str) -> Dict[str, Any]:
        path = self.path_for(identifier)
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, self._read_document, path)
        except FileNotFoundError as e:
            raise DataError(f"No data file for {identifier}: {path}") from e
        except json.JSONDecodeError as e:
            raise DataError(f"Malformed data file {path}: {e}") from e
        except OSError as e:
            raise ExternalServiceError(f"Could not read data file {path}: {e}") from e

    @staticmethod
    def _read_document(path: Path) -> Dict[str, Any]:
        logger.debug(f"Reading data file {path}")
        with path.open("r", encoding="utf-8") as f:
            document = json.load(f)
        if not isinstance(document, dict):
            raise DataError(f"Data file {path} must hold a JSON object")
        return document
