"""Infrastructure concerns shared across the token analyzer service."""

from token_analyzer.infrastructure.logging import (
    setup_logging,
    log_performance,
    set_correlation_id,
    get_correlation_id,
    generate_correlation_id,
)

__all__ = [
    "setup_logging",
    "log_performance",
    "set_correlation_id",
    "get_correlation_id",
    "generate_correlation_id",
]
