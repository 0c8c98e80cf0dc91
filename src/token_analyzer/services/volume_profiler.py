"""Volume profile, value area and accumulation/distribution zone detection."""

from typing import Dict, List, Sequence

import pandas as pd
from loguru import logger

from token_analyzer.config.settings import Settings
from token_analyzer.models.analysis import (
    ValueArea,
    VolumeAnalysis,
    VolumeZone,
    ZoneType,
)
from token_analyzer.models.market_data import HistoricalDataPoint, series_to_dataframe
from token_analyzer.utils.helpers import format_price_level


class VolumeProfiler:
    """Builds price-bucketed volume statistics over a series."""

    def __init__(self, settings: Settings) -> None:
        """Initialize the profiler with settings."""
        self.settings = settings

    def profile(self, series: Sequence[HistoricalDataPoint]) -> VolumeAnalysis:
        """
        Build the complete volume analysis of a series.

        Args:
            series: Validated data points in working order

        Returns:
            VolumeAnalysis with profile, value area and zones
        """
        df = series_to_dataframe(series)
        volume_profile = self.build_volume_profile(df)
        value_area = self.calculate_value_area(volume_profile)
        zones = self.detect_volume_zones(df)

        logger.debug(
            f"Volume profile: {len(volume_profile)} levels, "
            f"{len(zones)} zones over {len(df)} points"
        )

        return VolumeAnalysis(
            volume_profile=volume_profile,
            value_areas=value_area,
            volume_zones=zones,
        )

    def build_volume_profile(self, df: pd.DataFrame) -> Dict[str, float]:
        """Sum volume per price level (price rounded to the configured decimals)."""
        if df.empty:
            return {}

        decimals = self.settings.price_bucket_decimals
        levels = df["price"].map(lambda price: format_price_level(price, decimals))
        grouped = df["volume"].groupby(levels, sort=False).sum()
        return {str(level): float(volume) for level, volume in grouped.items()}

    def calculate_value_area(self, volume_profile: Dict[str, float]) -> ValueArea:
        """
        Find the smallest set of levels covering the value area ratio of volume.

        Levels are ranked by volume descending (ties by price ascending) and
        accumulated until the covered share reaches the ratio.

        Args:
            volume_profile: Volume per price level

        Returns:
            ValueArea spanning the selected levels; zero when no volume traded
        """
        total_volume = sum(volume_profile.values())
        if total_volume <= 0:
            return ValueArea()

        ranked = sorted(
            volume_profile.items(),
            key=lambda item: (-item[1], float(item[0]))
        )

        selected: List[float] = []
        cumulative = 0.0
        for level, volume in ranked:
            selected.append(float(level))
            cumulative += volume
            if cumulative / total_volume >= self.settings.value_area_ratio:
                break

        return ValueArea(
            high=max(selected),
            low=min(selected),
            value=sum(selected) / len(selected),
        )

    def detect_volume_zones(self, df: pd.DataFrame) -> List[VolumeZone]:
        """
        Detect windows of abnormal volume with a directional price move.

        For each point ``i`` past the window, the preceding ``window`` points are
        compared against the full-series average volume; the price change is
        measured between ``i`` and ``i - window``. Flat windows are skipped.

        Returns:
            Zones in working order; empty when the series is not longer than the window
        """
        window = self.settings.volume_zone_window
        if len(df) <= window:
            return []

        average_volume = df["volume"].mean()
        threshold = average_volume * self.settings.volume_zone_multiplier

        # Values at row i describe the window [i - window, i)
        window_volume = df["volume"].rolling(window=window).sum().shift(1)
        window_price = df["price"].rolling(window=window).mean().shift(1)
        price_change = df["price"].diff(window)

        zones = []
        for i in range(window, len(df)):
            change = price_change.iloc[i]
            volume_sum = window_volume.iloc[i]
            if volume_sum <= threshold or change == 0:
                continue

            zones.append(
                VolumeZone(
                    price=float(window_price.iloc[i]),
                    volume=float(volume_sum),
                    type=ZoneType.ACCUMULATION if change > 0 else ZoneType.DISTRIBUTION,
                )
            )

        return zones
