"""Market data models and schemas."""

from datetime import datetime, timezone
from typing import List, Sequence

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field


class HistoricalDataPoint(BaseModel):
    """Single price/volume observation of a token or collection."""

    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(description="Observation time as epoch milliseconds")
    price: float = Field(ge=0, description="Price at the observation")
    volume: float = Field(ge=0, description="Traded volume at the observation")


def series_to_dataframe(series: Sequence[HistoricalDataPoint]) -> pd.DataFrame:
    """Convert a series to a pandas DataFrame, keeping arrival order."""
    return pd.DataFrame(
        {
            "timestamp": [point.timestamp for point in series],
            "price": [float(point.price) for point in series],
            "volume": [float(point.volume) for point in series],
        }
    )


def series_prices(series: Sequence[HistoricalDataPoint]) -> List[float]:
    """Extract the price column of a series."""
    return [float(point.price) for point in series]


def series_volumes(series: Sequence[HistoricalDataPoint]) -> List[float]:
    """Extract the volume column of a series."""
    return [float(point.volume) for point in series]


def to_epoch_ms(moment: datetime) -> int:
    """Convert a datetime to epoch milliseconds (naive values are taken as UTC)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)
