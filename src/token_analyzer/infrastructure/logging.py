"""
Logging infrastructure built on loguru, with correlation IDs and performance timing.
"""

import sys
import time
import uuid
import asyncio
from contextvars import ContextVar
from functools import wraps
from typing import Optional

from loguru import logger

from token_analyzer.config.settings import Settings, get_settings


# Context variable for request tracking
correlation_id_var: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)

TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<level>{message}</level>"
)


def _inject_context(record: dict) -> None:
    """Patch every record with the current correlation ID."""
    record["extra"].setdefault(
        "correlation_id", correlation_id_var.get() or "unknown"
    )


class LoggerManager:
    """Configures loguru sinks from application settings."""

    def __init__(self) -> None:
        self._configured = False

    def configure_logging(self, settings: Optional[Settings] = None) -> None:
        """Configure application-wide logging."""
        if self._configured:
            return
        settings = settings or get_settings()

        # Remove default loguru handler
        logger.remove()
        logger.configure(patcher=_inject_context)

        if settings.log_format == "json":
            logger.add(
                sys.stdout,
                format="{time} {level} {name} {function} {line} {message}",
                serialize=True,
                level=settings.log_level
            )
        else:
            logger.add(
                sys.stdout,
                format=TEXT_FORMAT,
                level=settings.log_level,
                colorize=True
            )

        if settings.log_file_path:
            logger.add(
                settings.log_file_path,
                rotation=settings.log_rotation_size,
                retention=f"{settings.log_retention_days} days",
                compression="zip",
                serialize=settings.log_format == "json",
                level=settings.log_level
            )

        self._configured = True

    def reset(self) -> None:
        """Allow the next configure_logging call to reconfigure sinks."""
        self._configured = False


# Global logger manager instance
logger_manager = LoggerManager()


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Setup application logging."""
    logger_manager.configure_logging(settings)


def set_correlation_id(correlation_id: str) -> None:
    """Set correlation ID for current context."""
    correlation_id_var.set(correlation_id)


def get_correlation_id() -> Optional[str]:
    """Get current correlation ID."""
    return correlation_id_var.get()


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())


def log_performance(operation_name: str):
    """Decorator to log performance metrics for sync and async functions."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"Operation failed: {operation_name} after "
                    f"{(time.perf_counter() - start_time) * 1000:.1f}ms "
                    f"({type(e).__name__}: {e})"
                )
                raise
            logger.debug(
                f"Operation completed: {operation_name} in "
                f"{(time.perf_counter() - start_time) * 1000:.1f}ms"
            )
            return result

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            # Each top-level operation gets its own id; nested ones inherit it
            token = None
            correlation_id = get_correlation_id()
            if not correlation_id:
                correlation_id = generate_correlation_id()
                token = correlation_id_var.set(correlation_id)

            start_time = time.perf_counter()
            try:
                with logger.contextualize(correlation_id=correlation_id):
                    try:
                        result = await func(*args, **kwargs)
                    except Exception as e:
                        logger.error(
                            f"Async operation failed: {operation_name} after "
                            f"{(time.perf_counter() - start_time) * 1000:.1f}ms "
                            f"({type(e).__name__}: {e})"
                        )
                        raise
                    logger.debug(
                        f"Async operation completed: {operation_name} in "
                        f"{(time.perf_counter() - start_time) * 1000:.1f}ms"
                    )
                    return result
            finally:
                if token is not None:
                    correlation_id_var.reset(token)

        return async_wrapper if asyncio.iscoroutinefunction(func) else wrapper

    return decorator
