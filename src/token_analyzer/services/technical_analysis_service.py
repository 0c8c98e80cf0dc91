"""Technical analysis service orchestrating the metrics engine."""

import asyncio
from datetime import datetime
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Set, Union

from loguru import logger

from token_analyzer.config.settings import Settings
from token_analyzer.core.exceptions import (
    EmptyDataError,
    NoHistoricalDataError,
    TechnicalAnalysisFailedError,
)
from token_analyzer.infrastructure.logging import log_performance
from token_analyzer.models.analysis import (
    LiquidityData,
    MomentumData,
    TechnicalAnalysisData,
    TrendAnalysis,
    VolatilityMetrics,
    VolumeAnalysis,
)
from token_analyzer.models.market_data import (
    HistoricalDataPoint,
    series_prices,
    to_epoch_ms,
)
from token_analyzer.services.heuristic_model import HeuristicPatternModel
from token_analyzer.services.liquidity_analyzer import LiquidityAnalyzer
from token_analyzer.services.pattern_adapter import PatternPredictionAdapter
from token_analyzer.services.preprocessor import SeriesPreprocessor
from token_analyzer.services.volume_profiler import VolumeProfiler
from token_analyzer.utils.helpers import resolve_awaitable
from token_analyzer.utils.technical_indicators import TechnicalIndicatorCalculator

AnalysisCallback = Callable[[TechnicalAnalysisData], Union[None, Awaitable[None]]]


class Subscription:
    """Handle of a polling analysis subscription; calling it unsubscribes."""

    def __init__(
        self,
        identifier: str,
        task: asyncio.Task,
        on_cancel: Optional[Callable[["Subscription"], None]] = None
    ) -> None:
        self.identifier = identifier
        self.task = task
        self._on_cancel = on_cancel
        self._cancelled = False

    @property
    def active(self) -> bool:
        """Whether the subscription is still polling."""
        return not self._cancelled and not self.task.done()

    def cancel(self) -> None:
        """Stop polling. Safe to call more than once."""
        if self._cancelled:
            return
        self._cancelled = True
        self.task.cancel()
        if self._on_cancel is not None:
            self._on_cancel(self)
        logger.info(f"Unsubscribed from technical analysis updates for {self.identifier}")

    def __call__(self) -> None:
        self.cancel()


class TechnicalAnalysisService:
    """Service combining volume, liquidity, pattern, momentum, volatility and trend analysis."""

    def __init__(
        self,
        settings: Settings,
        data_provider: Any,
        model: Any = None
    ) -> None:
        """
        Initialize the technical analysis service.

        Args:
            settings: Application settings
            data_provider: Historical data provider (fetch / get_liquidity)
            model: Pattern/prediction model; defaults to HeuristicPatternModel
        """
        self.settings = settings
        self.data_provider = data_provider
        self.model = model if model is not None else HeuristicPatternModel(settings)

        self.preprocessor = SeriesPreprocessor()
        self.volume_profiler = VolumeProfiler(settings)
        self.liquidity_analyzer = LiquidityAnalyzer()
        self.pattern_adapter = PatternPredictionAdapter(self.model, settings)
        self.indicator_calculator = TechnicalIndicatorCalculator(settings)

        self._subscriptions: Set[Subscription] = set()

    @log_performance("technical_analysis")
    async def analyze(self, identifier: str) -> TechnicalAnalysisData:
        """
        Perform complete technical analysis for a token or collection.

        Args:
            identifier: Contract address or collection identifier

        Returns:
            TechnicalAnalysisData bundle

        Raises:
            NoHistoricalDataError: If the provider fails or returns no data
            TechnicalAnalysisFailedError: If a calculator fails unexpectedly
        """
        with logger.contextualize(identifier=identifier):
            series = await self._fetch_series(identifier)
            return await self.analyze_series(identifier, series)

    async def analyze_series(
        self,
        identifier: str,
        series: Sequence[Any],
        liquidity: Optional[LiquidityData] = None
    ) -> TechnicalAnalysisData:
        """
        Analyze an already fetched series.

        Args:
            identifier: Identifier the series belongs to
            series: Raw or validated data points in working order
            liquidity: Precomputed liquidity; fetched from the provider when omitted

        Returns:
            TechnicalAnalysisData bundle

        Raises:
            EmptyDataError: If the series is empty
            TechnicalAnalysisFailedError: If a calculator fails unexpectedly
        """
        try:
            points = self.preprocessor.validate(series)
            prices = series_prices(points)

            liquidity_task = (
                self._analyze_liquidity(identifier)
                if liquidity is None
                else self._passthrough(liquidity)
            )

            (
                volume,
                liquidity_data,
                patterns,
                predictions,
                momentum,
                volatility,
                trend,
            ) = await asyncio.gather(
                self._analyze_volume(points),
                liquidity_task,
                self.pattern_adapter.detect_patterns(points),
                self.pattern_adapter.predict(points),
                self._analyze_momentum(prices),
                self._analyze_volatility(prices),
                self._analyze_trend(prices),
            )

            result = TechnicalAnalysisData(
                identifier=identifier,
                as_of=points[-1].timestamp,
                data_points=len(points),
                volume=volume,
                liquidity=liquidity_data,
                patterns=patterns,
                predictions=predictions,
                momentum=momentum,
                volatility=volatility,
                trend=trend,
            )
        except (EmptyDataError, NoHistoricalDataError):
            raise
        except Exception as e:
            logger.error(f"Error performing technical analysis for {identifier}: {e}")
            raise TechnicalAnalysisFailedError(identifier, e) from e

        logger.info(
            f"Technical analysis for {identifier}: {len(points)} points, "
            f"trend {result.trend.direction.value}, RSI {result.momentum.rsi:.1f}"
        )
        return result

    async def get_historical_analysis(
        self,
        identifier: str,
        start_time: datetime,
        end_time: datetime
    ) -> List[TechnicalAnalysisData]:
        """
        Analyze the series as it stood at the end of each interval in a range.

        The range is split into ``historical_interval_seconds`` buckets; for every
        bucket holding data, the points of the range up to the bucket end are
        analyzed. Liquidity is fetched once and shared by every bucket.

        Both ends are inclusive, so an ``end_time`` on a bucket boundary opens a
        last bucket holding only the point at ``end_time``. The last entry may
        therefore cover a partial interval.

        Args:
            identifier: Contract address or collection identifier
            start_time: Range start (inclusive)
            end_time: Range end (inclusive)

        Returns:
            One analysis per non-empty bucket in chronological order; empty on any error
        """
        try:
            raw_series = await resolve_awaitable(self.data_provider.fetch(identifier))
            series = self.preprocessor.validate(raw_series)

            start_ms = to_epoch_ms(start_time)
            end_ms = to_epoch_ms(end_time)
            if end_ms < start_ms:
                logger.warning(f"Historical range for {identifier} ends before it starts")
                return []

            in_range = [
                point for point in series if start_ms <= point.timestamp <= end_ms
            ]
            if not in_range:
                logger.info(f"No historical data for {identifier} in requested range")
                return []

            interval_ms = self.settings.historical_interval_seconds * 1000
            buckets = sorted(
                {(point.timestamp - start_ms) // interval_ms for point in in_range}
            )

            liquidity = await self._analyze_liquidity(identifier)
            analyses = await asyncio.gather(*[
                self.analyze_series(
                    identifier,
                    [
                        point for point in in_range
                        if point.timestamp < start_ms + (bucket + 1) * interval_ms
                    ],
                    liquidity=liquidity,
                )
                for bucket in buckets
            ])
        except Exception as e:
            logger.error(f"Error performing historical analysis for {identifier}: {e}")
            return []

        logger.info(f"Historical analysis for {identifier}: {len(analyses)} intervals")
        return list(analyses)

    async def subscribe_to_updates(
        self,
        identifier: str,
        callback: AnalysisCallback
    ) -> Subscription:
        """
        Re-run the analysis periodically and push each result to a callback.

        Errors inside a tick are logged and the tick is skipped.

        Args:
            identifier: Contract address or collection identifier
            callback: Sync or async function receiving each analysis

        Returns:
            Subscription handle; call it (or ``cancel()``) to unsubscribe
        """
        interval = self.settings.subscription_interval_seconds

        async def _poll() -> None:
            while True:
                await asyncio.sleep(interval)
                try:
                    analysis = await self.analyze(identifier)
                    await resolve_awaitable(callback(analysis))
                except Exception as e:
                    logger.error(f"Error updating technical analysis for {identifier}: {e}")

        task = asyncio.create_task(_poll(), name=f"technical-analysis:{identifier}")
        subscription = Subscription(identifier, task, on_cancel=self._subscriptions.discard)
        self._subscriptions.add(subscription)

        logger.info(
            f"Subscribed to technical analysis updates for {identifier} "
            f"every {interval}s"
        )
        return subscription

    async def close(self) -> None:
        """Cancel every live subscription and wait for the polling tasks to stop."""
        subscriptions = list(self._subscriptions)
        for subscription in subscriptions:
            subscription.cancel()
        await asyncio.gather(
            *(subscription.task for subscription in subscriptions),
            return_exceptions=True
        )

    async def _fetch_series(self, identifier: str) -> List[Any]:
        try:
            raw_series = await resolve_awaitable(self.data_provider.fetch(identifier))
        except Exception as e:
            logger.error(f"Historical data fetch failed for {identifier}: {e}")
            raise NoHistoricalDataError(identifier, str(e)) from e

        if not raw_series:
            raise NoHistoricalDataError(identifier)
        return list(raw_series)

    async def _analyze_liquidity(self, identifier: str) -> LiquidityData:
        try:
            depth = await resolve_awaitable(self.data_provider.get_liquidity(identifier))
            return self.liquidity_analyzer.analyze(depth or {})
        except Exception as e:
            logger.warning(f"Liquidity analysis failed for {identifier}, using zero depth: {e}")
            return LiquidityData.zero()

    @staticmethod
    async def _passthrough(value: Any) -> Any:
        return value

    async def _analyze_volume(self, series: List[HistoricalDataPoint]) -> VolumeAnalysis:
        return self.volume_profiler.profile(series)

    async def _analyze_momentum(self, prices: List[float]) -> MomentumData:
        return self.indicator_calculator.calculate_momentum_data(prices)

    async def _analyze_volatility(self, prices: List[float]) -> VolatilityMetrics:
        return self.indicator_calculator.calculate_volatility(prices)

    async def _analyze_trend(self, prices: List[float]) -> TrendAnalysis:
        return self.indicator_calculator.calculate_trend(prices)
