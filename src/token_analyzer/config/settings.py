"""Application settings and configuration management."""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="TOKEN_ANALYZER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging Configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level"
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format"
    )
    log_file_path: Optional[str] = Field(
        default=None,
        description="Optional log file path"
    )
    log_rotation_size: str = Field(
        default="50 MB",
        description="Log file rotation size"
    )
    log_retention_days: int = Field(
        default=7,
        description="Days to keep rotated log files"
    )

    # Data Provider Configuration
    data_directory: str = Field(
        default="./data",
        description="Directory of JSON series files for the file provider"
    )

    # Volume Profile Parameters
    price_bucket_decimals: int = Field(
        default=2,
        description="Decimals used to bucket prices in the volume profile"
    )
    value_area_ratio: float = Field(
        default=0.70,
        description="Share of total volume covered by the value area"
    )
    volume_zone_window: int = Field(
        default=24,
        description="Window length (points) for accumulation/distribution zones"
    )
    volume_zone_multiplier: float = Field(
        default=1.5,
        description="Window volume vs average volume threshold for zones"
    )

    # Momentum Parameters
    rsi_period: int = Field(default=14, description="RSI period")
    macd_fast: int = Field(default=12, description="MACD fast EMA period")
    macd_slow: int = Field(default=26, description="MACD slow EMA period")
    macd_signal: int = Field(default=9, description="MACD signal EMA period")
    macd_sma_seed: bool = Field(
        default=False,
        description="Seed MACD EMAs with an SMA warm-up instead of the first value"
    )
    momentum_period: int = Field(
        default=14,
        description="Lookback (points) for rate-of-change momentum"
    )

    # Volatility Parameters
    annualization_days: int = Field(
        default=365,
        description="Periods per year used to annualize volatility"
    )
    volatility_index_days: int = Field(
        default=30,
        description="Horizon in days of the volatility index"
    )
    implied_volatility_multiplier: float = Field(
        default=1.1,
        description="Heuristic multiplier from historical to implied volatility"
    )

    # Trend Parameters
    sma_short: int = Field(default=20, description="Short SMA period for trend")
    sma_long: int = Field(default=50, description="Long SMA period for trend")
    trend_threshold: float = Field(
        default=0.02,
        description="Relative SMA gap separating a trend from sideways action"
    )
    pivot_window: int = Field(
        default=5,
        description="Points on each side used to detect support/resistance pivots"
    )

    # Prediction Parameters
    prediction_timeframe: str = Field(
        default="24h",
        description="Horizon label attached to predictions"
    )
    prediction_horizon: int = Field(
        default=24,
        description="Points ahead extrapolated by the heuristic model"
    )

    # Aggregator Parameters
    historical_interval_seconds: int = Field(
        default=86400,
        description="Bucket size of the historical analysis range"
    )
    subscription_interval_seconds: float = Field(
        default=60.0,
        description="Polling interval of analysis subscriptions"
    )

    @field_validator(
        "rsi_period", "macd_fast", "macd_slow", "macd_signal", "momentum_period",
        "sma_short", "sma_long", "pivot_window", "volume_zone_window",
        "annualization_days", "volatility_index_days", "historical_interval_seconds",
        "prediction_horizon",
    )
    @classmethod
    def validate_positive_period(cls, v: int) -> int:
        """Validate that periods and windows are positive."""
        if v <= 0:
            raise ValueError("Periods and windows must be positive")
        return v

    @field_validator("macd_slow")
    @classmethod
    def validate_macd_periods(cls, v: int, info: ValidationInfo) -> int:
        """Validate that the slow MACD period exceeds the fast one."""
        fast = info.data.get("macd_fast")
        if fast is not None and v <= fast:
            raise ValueError("macd_slow must be greater than macd_fast")
        return v

    @field_validator("value_area_ratio")
    @classmethod
    def validate_ratio(cls, v: float) -> float:
        """Validate the value area ratio."""
        if not 0 < v <= 1:
            raise ValueError("value_area_ratio must be in (0, 1]")
        return v

    @field_validator("subscription_interval_seconds")
    @classmethod
    def validate_interval(cls, v: float) -> float:
        """Validate the subscription interval."""
        if v <= 0:
            raise ValueError("subscription_interval_seconds must be positive")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
