"""Unit tests for the liquidity analyzer."""

import pytest

from token_analyzer.models.analysis import LiquidityData
from token_analyzer.services.liquidity_analyzer import LiquidityAnalyzer


class TestLiquidityAnalyzer:
    """Test depth concentration, imbalance and efficiency."""

    def test_analyze_depth(self, sample_depth):
        """Test statistics of a three-level depth map."""
        liquidity = LiquidityAnalyzer().analyze(sample_depth)

        total = 3700.0
        expected_concentration = (1000 ** 2 + 1500 ** 2 + 1200 ** 2) / total ** 2

        assert liquidity.depth == {"100": 1000.0, "110": 1500.0, "105": 1200.0}
        assert liquidity.concentration == pytest.approx(expected_concentration)
        # Split at index 1: [1000] vs [1500, 1200]
        assert liquidity.imbalance == pytest.approx(1700 / total)
        assert liquidity.efficiency == pytest.approx(1 - expected_concentration)

    def test_efficiency_complements_concentration(self):
        """Test efficiency + concentration == 1 for several depth maps."""
        analyzer = LiquidityAnalyzer()

        depths = [
            {"1": 10.0},
            {"1": 10.0, "2": 10.0},
            {"1": 1.0, "2": 2.0, "3": 3.0, "4": 4.0},
            {"0.5": 1e-6, "0.6": 1e6},
        ]
        for depth in depths:
            liquidity = analyzer.analyze(depth)
            assert 0.0 <= liquidity.concentration <= 1.0
            assert liquidity.efficiency + liquidity.concentration == pytest.approx(1.0)

    def test_single_level_is_fully_concentrated(self):
        """Test a single depth level."""
        liquidity = LiquidityAnalyzer().analyze({"42": 500.0})

        assert liquidity.concentration == pytest.approx(1.0)
        assert liquidity.efficiency == pytest.approx(0.0)
        assert liquidity.imbalance == pytest.approx(1.0)

    def test_balanced_halves(self):
        """Test equal halves have no imbalance."""
        liquidity = LiquidityAnalyzer().analyze({"1": 5.0, "2": 5.0, "3": 5.0, "4": 5.0})

        assert liquidity.imbalance == pytest.approx(0.0)
        assert liquidity.concentration == pytest.approx(0.25)

    def test_degenerate_depth(self):
        """Test empty and zero-volume depth maps."""
        analyzer = LiquidityAnalyzer()

        assert analyzer.analyze({}) == LiquidityData.zero()

        zero = analyzer.analyze({"1": 0.0, "2": 0.0})
        assert zero.concentration == 0.0
        assert zero.imbalance == 0.0
        assert zero.efficiency == 0.0
        assert zero.depth == {"1": 0.0, "2": 0.0}
