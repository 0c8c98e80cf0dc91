"""Momentum, volatility and trend calculations for technical analysis."""

import math
from typing import List, Sequence, Tuple

import numpy as np
import pandas as pd
from loguru import logger

from token_analyzer.config.settings import Settings
from token_analyzer.models.analysis import (
    MacdData,
    MomentumData,
    TrendAnalysis,
    TrendDirection,
    VolatilityMetrics,
)
from token_analyzer.utils.helpers import (
    calculate_ema,
    clamp,
    log_returns,
    safe_divide,
    simple_average,
)


class TechnicalIndicatorCalculator:
    """Calculator for momentum, volatility and trend indicators over a price series."""

    def __init__(self, settings: Settings) -> None:
        """Initialize the calculator with settings."""
        self.settings = settings

    def calculate_momentum_data(self, prices: Sequence[float]) -> MomentumData:
        """
        Calculate all momentum indicators.

        Args:
            prices: Prices in working order

        Returns:
            MomentumData with RSI, MACD and rate-of-change momentum
        """
        rsi = self.calculate_rsi(prices, self.settings.rsi_period)
        macd = self.calculate_macd(
            prices,
            self.settings.macd_fast,
            self.settings.macd_slow,
            self.settings.macd_signal,
        )
        momentum = self.calculate_momentum(prices, self.settings.momentum_period)
        return MomentumData(rsi=rsi, macd=macd, momentum=momentum)

    def calculate_rsi(self, prices: Sequence[float], period: int = 14) -> float:
        """
        Calculate the Relative Strength Index over the trailing ``period`` changes.

        Series shorter than the period use every available change.

        Args:
            prices: Prices in working order
            period: RSI period

        Returns:
            RSI value (0-100); 50.0 when there is no price change to measure
        """
        if len(prices) < 2:
            return 50.0

        changes = np.diff(np.asarray(prices, dtype=float))[-period:]
        avg_gain = float(np.mean(np.clip(changes, 0, None)))
        avg_loss = float(np.mean(np.clip(-changes, 0, None)))

        if avg_loss == 0:
            return 100.0

        rs = avg_gain / avg_loss
        return clamp(100 - (100 / (1 + rs)), 0.0, 100.0)

    def calculate_macd(
        self,
        prices: Sequence[float],
        fast_period: int = 12,
        slow_period: int = 26,
        signal_period: int = 9
    ) -> MacdData:
        """
        Calculate MACD line, signal line and histogram at the latest point.

        Args:
            prices: Prices in working order
            fast_period: Fast EMA period
            slow_period: Slow EMA period
            signal_period: Signal EMA period

        Returns:
            MacdData snapshot
        """
        if not prices:
            return MacdData()

        sma_seed = self.settings.macd_sma_seed
        ema_fast = calculate_ema(prices, fast_period, sma_seed=sma_seed)
        ema_slow = calculate_ema(prices, slow_period, sma_seed=sma_seed)
        macd_line = [fast - slow for fast, slow in zip(ema_fast, ema_slow)]
        signal_line = calculate_ema(macd_line, signal_period, sma_seed=sma_seed)

        value = macd_line[-1]
        signal = signal_line[-1]
        return MacdData(value=value, signal=signal, histogram=value - signal)

    def calculate_momentum(self, prices: Sequence[float], period: int = 14) -> float:
        """Percent change between the latest price and the price ``period`` points earlier."""
        if len(prices) < 2:
            return 0.0

        reference = prices[-1 - period] if len(prices) > period else prices[0]
        return safe_divide(prices[-1] - reference, reference) * 100

    def calculate_volatility(self, prices: Sequence[float]) -> VolatilityMetrics:
        """
        Calculate volatility metrics from log returns.

        Args:
            prices: Prices in working order

        Returns:
            VolatilityMetrics; all zero with fewer than two returns
        """
        returns = log_returns(prices)
        if returns.size < 2:
            logger.debug(f"Insufficient returns for volatility: {returns.size}")
            return VolatilityMetrics(
                historical_volatility=0.0,
                implied_volatility=0.0,
                volatility_index=0.0,
                volatility_skew=0.0,
            )

        historical = (
            float(np.std(returns, ddof=1))
            * math.sqrt(self.settings.annualization_days)
            * 100
        )

        return VolatilityMetrics(
            historical_volatility=historical,
            implied_volatility=historical * self.settings.implied_volatility_multiplier,
            volatility_index=historical * math.sqrt(
                self.settings.volatility_index_days / self.settings.annualization_days
            ),
            volatility_skew=self.calculate_skewness(returns),
        )

    @staticmethod
    def calculate_skewness(values: np.ndarray) -> float:
        """Third standardized moment; 0.0 for constant values."""
        std = float(np.std(values))
        if std == 0:
            return 0.0
        deviations = values - np.mean(values)
        return float(np.mean(deviations ** 3) / std ** 3)

    def calculate_trend(self, prices: Sequence[float]) -> TrendAnalysis:
        """
        Calculate trend direction, strength and support/resistance pivots.

        Args:
            prices: Prices in working order

        Returns:
            TrendAnalysis result
        """
        direction = self.calculate_trend_direction(
            simple_average(prices, self.settings.sma_short),
            simple_average(prices, self.settings.sma_long),
        )

        strength = 0.0
        if len(prices) > 1:
            strength = float(np.mean(np.abs(np.diff(np.asarray(prices, dtype=float)))))

        support, resistance = self.calculate_support_resistance(
            prices, self.settings.pivot_window
        )

        return TrendAnalysis(
            direction=direction,
            strength=strength,
            support=support,
            resistance=resistance,
        )

    def calculate_trend_direction(
        self,
        sma_short: float,
        sma_long: float
    ) -> TrendDirection:
        """
        Calculate trend direction from the short/long SMA relationship.

        Args:
            sma_short: Short-period SMA value
            sma_long: Long-period SMA value

        Returns:
            Bullish, bearish or sideways
        """
        threshold = self.settings.trend_threshold
        if sma_short > sma_long * (1 + threshold):
            return TrendDirection.BULLISH
        elif sma_short < sma_long * (1 - threshold):
            return TrendDirection.BEARISH
        else:
            return TrendDirection.SIDEWAYS

    def calculate_support_resistance(
        self,
        prices: Sequence[float],
        window: int = 5
    ) -> Tuple[List[float], List[float]]:
        """
        Find pivot levels: local minima (support) and maxima (resistance).

        A point is a pivot when it equals the min/max of the ``window`` points on
        each side of it; points without a full window on both sides are skipped.

        Returns:
            Tuple of (support, resistance), each deduplicated and sorted ascending
        """
        span = 2 * window + 1
        if len(prices) < span:
            return [], []

        series = pd.Series(prices, dtype=float)
        rolling = series.rolling(window=span, center=True)
        local_max = rolling.max()
        local_min = rolling.min()

        resistance = series[local_max.notna() & (series == local_max)]
        support = series[local_min.notna() & (series == local_min)]

        return sorted(set(support.tolist())), sorted(set(resistance.tolist()))
