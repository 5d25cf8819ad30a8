"""Retry mechanisms for content store backend operations."""

import asyncio
import functools
import sqlite3
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

from hashbrowns.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff settings for a backend."""

    max_retries: int = 3
    base_delay: float = 0.1
    max_delay: float = 2.0
    backoff_factor: float = 2.0

    def delay(self, attempt: int) -> float:
        """Delay before retry number ``attempt`` (zero based)."""
        return min(self.base_delay * (self.backoff_factor**attempt), self.max_delay)


def is_retryable_sqlite_error(exc: Exception) -> bool:
    """Tell lock contention apart from errors a retry cannot fix."""
    if not isinstance(exc, sqlite3.OperationalError):
        return False
    error_msg = str(exc).lower()
    if (
        "no such table" in error_msg
        or "no such column" in error_msg
        or "syntax error" in error_msg
    ):
        return False
    return True


def with_retry(
    retry_on: tuple[type[Exception], ...],
    should_retry: Callable[[Exception], bool] | None = None,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator that retries a blocking method with exponential backoff.

    The decorated method's instance must expose a ``retry_policy``.

    Args:
        retry_on: Exception types that trigger a retry
        should_retry: Optional finer check applied to a matching exception

    Returns:
        Decorated method with retry logic
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> T:
            policy: RetryPolicy = self.retry_policy
            attempt = 0
            while True:
                try:
                    return func(self, *args, **kwargs)
                except retry_on as e:
                    if (
                        should_retry is not None and not should_retry(e)
                    ) or attempt >= policy.max_retries:
                        raise
                    delay = policy.delay(attempt)
                    logger.debug(
                        "store_operation_retry",
                        operation=func.__name__,
                        attempt=attempt + 1,
                        max_attempts=policy.max_retries + 1,
                        error=str(e),
                        delay=delay,
                    )
                    time.sleep(delay)
                    attempt += 1

        return wrapper

    return decorator


def with_async_retry(
    retry_on: tuple[type[Exception], ...],
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Async counterpart of :func:`with_retry`."""

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(self: Any, *args: Any, **kwargs: Any) -> T:
            policy: RetryPolicy = self.retry_policy
            attempt = 0
            while True:
                try:
                    return await func(self, *args, **kwargs)
                except retry_on as e:
                    if attempt >= policy.max_retries:
                        raise
                    delay = policy.delay(attempt)
                    logger.debug(
                        "store_operation_retry",
                        operation=func.__name__,
                        attempt=attempt + 1,
                        max_attempts=policy.max_retries + 1,
                        error=str(e),
                        delay=delay,
                    )
                    await asyncio.sleep(delay)
                    attempt += 1

        return wrapper

    return decorator
