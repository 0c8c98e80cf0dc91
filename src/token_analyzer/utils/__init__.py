"""Utility modules for the token analyzer service."""

from token_analyzer.utils.technical_indicators import TechnicalIndicatorCalculator
from token_analyzer.utils.helpers import (
    calculate_ema,
    clamp,
    format_price_level,
    log_returns,
    safe_divide,
    simple_average,
)

__all__ = [
    "TechnicalIndicatorCalculator",
    "calculate_ema",
    "clamp",
    "format_price_level",
    "log_returns",
    "safe_divide",
    "simple_average",
]
