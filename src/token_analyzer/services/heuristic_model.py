"""Default pattern detection and prediction model based on linear regression and pivots."""

from typing import List, Sequence, Tuple

import numpy as np
from loguru import logger

from token_analyzer.config.settings import Settings
from token_analyzer.core.protocols import PatternPredictionModel
from token_analyzer.models.analysis import PatternData, PredictionMetrics, PriceTargets
from token_analyzer.models.market_data import (
    HistoricalDataPoint,
    series_prices,
    series_volumes,
)
from token_analyzer.utils.helpers import clamp, safe_divide
from token_analyzer.utils.technical_indicators import TechnicalIndicatorCalculator

MIN_CHANNEL_R_SQUARED = 0.6
MIN_RELATIVE_SLOPE = 0.001


class HeuristicPatternModel(PatternPredictionModel):
    """Regression-channel and pivot-breakout heuristics standing in for a learned model."""

    def __init__(self, settings: Settings) -> None:
        """Initialize the model with settings."""
        self.settings = settings
        self.indicator_calculator = TechnicalIndicatorCalculator(settings)

    async def detect_patterns(
        self, series: List[HistoricalDataPoint]
    ) -> List[PatternData]:
        """
        Detect regression channels and pivot breakouts.

        Args:
            series: Validated data points in working order

        Returns:
            Detected patterns, possibly empty
        """
        prices = series_prices(series)
        if len(prices) < 2 * self.settings.pivot_window + 1:
            return []

        patterns = []
        channel = self._detect_channel(prices)
        if channel is not None:
            patterns.append(channel)

        breakout = self._detect_breakout(prices)
        if breakout is not None:
            patterns.append(breakout)

        logger.debug(f"Heuristic model detected {len(patterns)} patterns")
        return patterns

    async def predict(self, series: List[HistoricalDataPoint]) -> PredictionMetrics:
        """
        Extrapolate the regression line ``prediction_horizon`` points ahead.

        Raises:
            ValueError: If fewer than three points are available
        """
        prices = series_prices(series)
        if len(prices) < 3:
            raise ValueError("At least three points are required for a prediction")

        slope, intercept, r_squared = self._fit(prices)
        horizon_x = len(prices) - 1 + self.settings.prediction_horizon
        predicted_price = max(0.0, intercept + slope * horizon_x)

        factors = [self._describe_slope(slope, prices)]
        factors.append(f"r_squared={r_squared:.2f}")
        if self._has_rising_volume(series_volumes(series)):
            factors.append("high volume")

        return PredictionMetrics(
            predicted_price=predicted_price,
            confidence=clamp(r_squared, 0.0, 1.0),
            timeframe=self.settings.prediction_timeframe,
            supporting_factors=factors,
        )

    @staticmethod
    def _fit(prices: Sequence[float]) -> Tuple[float, float, float]:
        """Least-squares line through the prices; returns (slope, intercept, r_squared)."""
        y = np.asarray(prices, dtype=float)
        x = np.arange(len(y), dtype=float)
        slope, intercept = np.polyfit(x, y, 1)

        fitted = intercept + slope * x
        ss_res = float(np.sum((y - fitted) ** 2))
        ss_tot = float(np.sum((y - np.mean(y)) ** 2))
        r_squared = 1 - ss_res / ss_tot if ss_tot > 0 else 0.0

        return float(slope), float(intercept), r_squared

    def _describe_slope(self, slope: float, prices: Sequence[float]) -> str:
        relative_slope = safe_divide(slope, float(np.mean(prices)))
        if relative_slope > MIN_RELATIVE_SLOPE:
            return "uptrend"
        elif relative_slope < -MIN_RELATIVE_SLOPE:
            return "downtrend"
        return "flat"

    def _has_rising_volume(self, volumes: Sequence[float]) -> bool:
        window = self.settings.pivot_window
        if len(volumes) <= window:
            return False
        return float(np.mean(volumes[-window:])) > float(np.mean(volumes))

    def _detect_channel(self, prices: Sequence[float]):
        slope, intercept, r_squared = self._fit(prices)
        trend = self._describe_slope(slope, prices)
        if r_squared < MIN_CHANNEL_R_SQUARED or trend == "flat":
            return None

        x = np.arange(len(prices), dtype=float)
        residual_std = float(np.std(np.asarray(prices) - (intercept + slope * x)))
        last_price = prices[-1]
        target = max(0.0, intercept + slope * (len(prices) - 1 + self.settings.prediction_horizon))

        if trend == "uptrend":
            pattern = "ascending_channel"
            stop_loss = max(0.0, last_price - 2 * residual_std)
        else:
            pattern = "descending_channel"
            stop_loss = last_price + 2 * residual_std

        return PatternData(
            pattern=pattern,
            confidence=clamp(r_squared, 0.0, 1.0),
            price_targets=PriceTargets(entry=last_price, target=target, stop_loss=stop_loss),
            timeframe=self.settings.prediction_timeframe,
        )

    def _detect_breakout(self, prices: Sequence[float]):
        support, resistance = self.indicator_calculator.calculate_support_resistance(
            prices, self.settings.pivot_window
        )
        last_price = prices[-1]

        if resistance and last_price > resistance[-1]:
            level = resistance[-1]
            height = level - support[0] if support else level * 0.05
            return PatternData(
                pattern="breakout",
                confidence=clamp(safe_divide(last_price - level, level) * 10, 0.0, 1.0),
                price_targets=PriceTargets(
                    entry=last_price, target=level + height, stop_loss=level
                ),
                timeframe=self.settings.prediction_timeframe,
            )

        if support and last_price < support[0]:
            level = support[0]
            height = resistance[-1] - level if resistance else level * 0.05
            return PatternData(
                pattern="breakdown",
                confidence=clamp(safe_divide(level - last_price, level) * 10, 0.0, 1.0),
                price_targets=PriceTargets(
                    entry=last_price, target=max(0.0, level - height), stop_loss=level
                ),
                timeframe=self.settings.prediction_timeframe,
            )

        return None
