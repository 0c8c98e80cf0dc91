"""Historical data providers for the token analyzer service."""

from token_analyzer.providers.memory_provider import InMemoryDataProvider
from token_analyzer.providers.file_provider import JsonFileDataProvider

__all__ = [
    "InMemoryDataProvider",
    "JsonFileDataProvider",
]
