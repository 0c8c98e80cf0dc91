"""In-memory historical data provider."""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from token_analyzer.core.exceptions import DataError
from token_analyzer.core.protocols import HistoricalDataProvider


class InMemoryDataProvider(HistoricalDataProvider):
    """Serves static series and depth maps keyed by identifier."""

    def __init__(
        self,
        series: Optional[Mapping[str, Sequence[Any]]] = None,
        depth: Optional[Mapping[str, Mapping[str, float]]] = None
    ) -> None:
        self._series: Dict[str, List[Any]] = {
            key: list(value) for key, value in (series or {}).items()
        }
        self._depth: Dict[str, Dict[str, float]] = {
            key: dict(value) for key, value in (depth or {}).items()
        }

    def add_series(self, identifier: str, series: Sequence[Any]) -> None:
        """Register or replace the series of an identifier."""
        self._series[identifier] = list(series)

    def add_depth(self, identifier: str, depth: Mapping[str, float]) -> None:
        """Register or replace the depth map of an identifier."""
        self._depth[identifier] = dict(depth)

    async def fetch(self, identifier: str) -> List[Any]:
        """Return the registered series, or an empty list."""
        return list(self._series.get(identifier, []))

    async def get_liquidity(self, identifier: str) -> Dict[str, float]:
        """Return the registered depth map."""
        if identifier not in self._depth:
            raise DataError(f"No liquidity depth registered for {identifier}")
        return dict(self._depth[identifier])
