"""Bounded retry for a single asynchronous operation.

Only transient failures (see `errors.is_transient`) are retried, with a
constant delay between attempts. Anything else, or a failure once the
budget is spent, is re-raised unchanged.
"""

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

from ..errors import is_transient
from .logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

MAX_RETRIES = 3
RETRY_DELAY = 1.0


async def retry_operation(
    operation: Callable[[], Awaitable[T]],
    retries: int = MAX_RETRIES,
    delay: float = RETRY_DELAY,
    on_retry: Optional[Callable[[int, BaseException], None]] = None,
) -> T:
    """Run `operation`, retrying transient failures.

    Args:
        operation: Zero-argument coroutine function; called once per attempt
        retries: Additional attempts allowed after the first one
        delay: Seconds to wait before each retry
        on_retry: Optional hook called with (attempts_left, error) before waiting

    Returns:
        The result of the first successful attempt

    Raises:
        The original exception from the last attempt
    """
    attempts_left = retries
    while True:
        try:
            return await operation()
        except Exception as exc:
            if attempts_left <= 0 or not is_transient(exc):
                raise
            attempts_left -= 1
            logger.warning(
                f"Retrying operation. Attempts left: {attempts_left}",
                extra={"attempts_left": attempts_left, "error_type": type(exc).__name__},
            )
            if on_retry is not None:
                on_retry(attempts_left, exc)
            await asyncio.sleep(delay)
