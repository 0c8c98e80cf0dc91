"""Configuration management for the token analyzer service."""

from token_analyzer.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
