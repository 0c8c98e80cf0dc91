"""Liquidity depth concentration and imbalance statistics."""

from typing import Mapping

from token_analyzer.models.analysis import LiquidityData
from token_analyzer.utils.helpers import clamp


class LiquidityAnalyzer:
    """Computes concentration, imbalance and efficiency of a depth map."""

    def analyze(self, depth: Mapping[str, float]) -> LiquidityData:
        """
        Analyze a liquidity depth map.

        The depth levels are split at their midpoint index in the order the
        provider returned them; the two halves are not assumed to be bid/ask.

        Args:
            depth: Available volume per price level

        Returns:
            LiquidityData; the zero shape (depth echoed) for empty or zero depth
        """
        normalized = {str(level): float(volume) for level, volume in depth.items()}
        volumes = list(normalized.values())
        total_liquidity = sum(volumes)

        if not volumes or total_liquidity <= 0:
            return LiquidityData.zero(normalized)

        concentration = clamp(
            sum((volume / total_liquidity * 100) ** 2 for volume in volumes) / 10000,
            0.0, 1.0,
        )

        midpoint = len(volumes) // 2
        first_half = sum(volumes[:midpoint])
        second_half = sum(volumes[midpoint:])
        imbalance = clamp(abs(first_half - second_half) / total_liquidity, 0.0, 1.0)

        return LiquidityData(
            depth=normalized,
            concentration=concentration,
            imbalance=imbalance,
            efficiency=1 - concentration,
        )
