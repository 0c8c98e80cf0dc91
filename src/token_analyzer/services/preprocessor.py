"""Series validation ahead of technical analysis."""

from typing import Any, Iterable, List

from loguru import logger
from pydantic import ValidationError

from token_analyzer.core.exceptions import DataError, EmptyDataError
from token_analyzer.models.market_data import HistoricalDataPoint


class SeriesPreprocessor:
    """Validates raw historical series into typed data points."""

    def validate(self, series: Iterable[Any]) -> List[HistoricalDataPoint]:
        """
        Validate a raw price/volume series.

        Points are kept in arrival order; no resorting is applied.

        Args:
            series: HistoricalDataPoint instances, mappings or objects with
                timestamp/price/volume

        Returns:
            List of HistoricalDataPoint

        Raises:
            EmptyDataError: If the series holds no points
            DataError: If a point cannot be coerced
        """
        points = list(series) if series is not None else []
        if not points:
            raise EmptyDataError()

        validated = []
        for index, point in enumerate(points):
            if isinstance(point, HistoricalDataPoint):
                validated.append(point)
                continue
            try:
                validated.append(
                    HistoricalDataPoint.model_validate(point, from_attributes=True)
                )
            except ValidationError as e:
                raise DataError(f"Invalid data point at index {index}: {e}") from e

        if any(
            later.timestamp < earlier.timestamp
            for earlier, later in zip(validated, validated[1:])
        ):
            logger.warning("Series is not time-ordered; using arrival order")

        return validated
