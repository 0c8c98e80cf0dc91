"""Unit tests for the volume profiler."""

import pytest

from token_analyzer.config.settings import Settings
from token_analyzer.models.analysis import ZoneType
from token_analyzer.models.market_data import HistoricalDataPoint, series_to_dataframe
from token_analyzer.services.volume_profiler import VolumeProfiler


def make_series(prices, volumes=None):
    """Build a series with one-second spacing."""
    volumes = volumes or [1.0] * len(prices)
    return [
        HistoricalDataPoint(timestamp=i * 1000, price=price, volume=volume)
        for i, (price, volume) in enumerate(zip(prices, volumes))
    ]


class TestVolumeProfiler:
    """Test volume profile, value area and zones."""

    def test_volume_profile_buckets(self, test_settings: Settings):
        """Test prices are bucketed to two decimals."""
        profiler = VolumeProfiler(test_settings)

        series = make_series([100.0, 100.004, 110.0], [10.0, 5.0, 20.0])
        analysis = profiler.profile(series)

        assert analysis.volume_profile == {"100.00": 15.0, "110.00": 20.0}

    def test_value_area_sample_series(self, test_settings: Settings, sample_series):
        """Test value area for the four-point sample series."""
        profiler = VolumeProfiler(test_settings)

        series = [HistoricalDataPoint(**point) for point in sample_series]
        analysis = profiler.profile(series)

        # 2000 + 1500 covers 61%, adding 1200 covers 82%
        assert analysis.value_areas.high == 115.0
        assert analysis.value_areas.low == 105.0
        assert analysis.value_areas.value == pytest.approx(110.0)
        assert analysis.volume_zones == []

    def test_value_area_is_minimal(self, test_settings: Settings):
        """Test the value area stops as soon as the ratio is covered."""
        profiler = VolumeProfiler(test_settings)

        value_area = profiler.calculate_value_area({"1.00": 70.0, "2.00": 30.0})
        assert value_area.high == value_area.low == value_area.value == 1.0

        value_area = profiler.calculate_value_area(
            {"100.00": 50.0, "110.00": 30.0, "120.00": 20.0}
        )
        assert value_area.high == 110.0
        assert value_area.low == 100.0
        assert value_area.value == pytest.approx(105.0)

    def test_value_area_covers_ratio(self, test_settings: Settings, hourly_series):
        """Test covered share is at least the ratio and dropping a level breaks it."""
        profiler = VolumeProfiler(test_settings)

        analysis = profiler.profile(hourly_series)
        profile = analysis.volume_profile
        total = sum(profile.values())

        ranked = sorted(profile.items(), key=lambda item: (-item[1], float(item[0])))
        selected = [
            (level, volume) for level, volume in ranked
            if analysis.value_areas.low <= float(level) <= analysis.value_areas.high
        ]
        covered = 0.0
        prefix = 0
        for _, volume in ranked:
            covered += volume
            prefix += 1
            if covered / total >= test_settings.value_area_ratio:
                break

        assert covered / total >= 0.70
        assert (covered - ranked[prefix - 1][1]) / total < 0.70
        assert len(selected) >= prefix

        # Recomputing yields the same value area
        assert profiler.profile(hourly_series).value_areas == analysis.value_areas

    def test_value_area_zero_volume(self, test_settings: Settings):
        """Test a series without volume."""
        profiler = VolumeProfiler(test_settings)

        analysis = profiler.profile(make_series([1.0, 2.0], [0.0, 0.0]))

        assert analysis.value_areas.high == 0.0
        assert analysis.value_areas.low == 0.0
        assert analysis.value_areas.value == 0.0

    def test_accumulation_zones(self, test_settings: Settings):
        """Test rising windows with high volume are accumulation zones."""
        profiler = VolumeProfiler(test_settings)

        series = make_series([100.0 + i for i in range(30)])
        zones = profiler.profile(series).volume_zones

        assert len(zones) == 6
        assert all(zone.type == ZoneType.ACCUMULATION for zone in zones)
        assert zones[0].price == pytest.approx(111.5)
        assert zones[0].volume == pytest.approx(24.0)

    def test_distribution_zones(self, test_settings: Settings):
        """Test falling windows are distribution zones."""
        profiler = VolumeProfiler(test_settings)

        series = make_series([200.0 - i for i in range(30)])
        zones = profiler.profile(series).volume_zones

        assert len(zones) == 6
        assert all(zone.type == ZoneType.DISTRIBUTION for zone in zones)

    def test_flat_windows_emit_no_zone(self, test_settings: Settings):
        """Test unchanged prices produce no zones."""
        profiler = VolumeProfiler(test_settings)

        assert profiler.profile(make_series([50.0] * 40)).volume_zones == []

    def test_zone_volume_threshold(self):
        """Test windows below the volume threshold are ignored."""
        profiler = VolumeProfiler(Settings(volume_zone_multiplier=30.0))

        series = make_series([100.0 + i for i in range(30)])
        assert profiler.detect_volume_zones(series_to_dataframe(series)) == []

    def test_short_series_has_no_zones(self, test_settings: Settings):
        """Test a series not longer than the window."""
        profiler = VolumeProfiler(test_settings)

        series = make_series([100.0 + i for i in range(24)])
        assert profiler.profile(series).volume_zones == []
