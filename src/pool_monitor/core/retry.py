"""Bounded retry helper for async operations.

Wrap a zero-argument coroutine factory and re-await it a fixed number of
times, sleeping between attempts. Used for the outbound Telegram call
(fixed delay) and the Osmosis pool fetch (exponential backoff).
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    *,
    attempts: int,
    delay: float,
    backoff: float = 1.0,
    max_delay: float | None = None,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    description: str = "operation",
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
) -> T:
    """Await ``operation()`` until it succeeds or ``attempts`` are used up.

    Args:
        operation: Callable returning a fresh awaitable on each call.
        attempts: Total number of attempts, including the first one.
        delay: Seconds to wait before the second attempt.
        backoff: Multiplier applied to the delay after each failure.
            ``1.0`` gives a fixed delay.
        max_delay: Upper bound for the delay, or ``None`` for no cap.
        retry_on: Exception types that trigger another attempt. Anything
            else propagates immediately.
        description: Label used in log messages.
        sleep: Coroutine used to wait between attempts.

    Returns:
        The result of the first successful attempt.

    Raises:
        ValueError: If ``attempts`` is less than 1 or ``delay`` is negative.

    """
    if attempts < 1:
        msg = f"attempts must be at least 1, got {attempts}"
        raise ValueError(msg)
    if delay < 0:
        msg = f"delay must be non-negative, got {delay}"
        raise ValueError(msg)

    wait = delay
    for attempt in range(1, attempts + 1):
        try:
            return await operation()
        except retry_on as exc:
            if attempt == attempts:
                logger.warning("%s failed after %d attempts: %s", description, attempts, exc)
                raise
            logger.info(
                "%s failed (attempt %d of %d): %s; retrying in %.1fs",
                description,
                attempt,
                attempts,
                exc,
                wait,
            )
        await sleep(wait)
        wait *= backoff
        if max_delay is not None:
            wait = min(wait, max_delay)

    # Unreachable: the loop either returns or re-raises on the last attempt.
    msg = f"{description}: retry loop exited without a result"
    raise RuntimeError(msg)
