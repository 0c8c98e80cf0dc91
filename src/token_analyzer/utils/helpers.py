"""Helper utility functions."""

import inspect
from typing import Any, List, Sequence, Union

import numpy as np


def safe_divide(
    numerator: Union[float, int],
    denominator: Union[float, int],
    default: float = 0.0
) -> float:
    """
    Safely divide two numbers, returning default if denominator is zero.

    Args:
        numerator: Numerator value
        denominator: Denominator value
        default: Default value if division by zero

    Returns:
        Division result or default value
    """
    if denominator == 0:
        return default
    return numerator / denominator


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp a value into [lower, upper]."""
    return max(lower, min(upper, value))


def format_price_level(price: float, decimals: int = 2) -> str:
    """Format a price as a fixed-decimal bucket key."""
    return f"{price:.{decimals}f}"


def simple_average(values: Sequence[float], period: int) -> float:
    """
    Average of the trailing ``period`` values.

    Uses every available value when the sequence is shorter than the period.

    Args:
        values: List of values
        period: Moving average period

    Returns:
        Trailing average, 0.0 for an empty sequence
    """
    if not values:
        return 0.0
    window = values[-period:] if len(values) > period else values
    return float(np.mean(window))


def calculate_ema(
    values: Sequence[float],
    period: int,
    smoothing: float = 2.0,
    sma_seed: bool = False
) -> List[float]:
    """
    Calculate Exponential Moving Average.

    The first EMA value is the first input value. With ``sma_seed`` the EMA is
    seeded with the simple average of the first ``period`` values instead, and
    the earlier entries carry that seed.

    Args:
        values: List of values
        period: EMA period
        smoothing: Smoothing factor (default 2.0)
        sma_seed: Seed with an SMA warm-up window

    Returns:
        List of EMA values, one per input value
    """
    if not values or period <= 0:
        return []

    multiplier = smoothing / (period + 1)

    if sma_seed and len(values) >= period:
        seed = sum(values[:period]) / period
        ema_values = [seed] * period
        start = period
    else:
        ema_values = [values[0]]
        start = 1

    for i in range(start, len(values)):
        ema = (values[i] * multiplier) + (ema_values[i - 1] * (1 - multiplier))
        ema_values.append(ema)

    return ema_values


def log_returns(prices: Sequence[float]) -> np.ndarray:
    """
    Calculate log returns between consecutive prices.

    Pairs involving a non-positive price are skipped.
    """
    prices_array = np.asarray(prices, dtype=float)
    if prices_array.size < 2:
        return np.array([], dtype=float)

    previous = prices_array[:-1]
    current = prices_array[1:]
    valid = (previous > 0) & (current > 0)
    return np.log(current[valid] / previous[valid])


async def resolve_awaitable(result: Any) -> Any:
    """Await the result of a sync or async collaborator call."""
    if inspect.isawaitable(result):
        return await result
    return result
