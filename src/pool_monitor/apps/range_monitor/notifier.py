"""Outbound notifiers for range alerts.

The monitor hands each message to a ``Notifier`` and moves on; it never
learns whether delivery succeeded. ``TelegramNotifier`` delivers in a
background task. Transient failures get a bounded, fixed-delay retry;
a permanent rejection, or the last failed retry, drops the message.
``LogNotifier`` stands in when Telegram is disabled.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

from pool_monitor.clients.telegram.client import TelegramClient
from pool_monitor.clients.telegram.exceptions import TelegramError, TelegramTransportError
from pool_monitor.core.retry import retry_async

logger = logging.getLogger(__name__)


@runtime_checkable
class Notifier(Protocol):
    """Fire-and-forget sink for notification text."""

    def notify(self, text: str) -> None:
        """Queue ``text`` for delivery and return immediately."""
        ...

    async def aclose(self) -> None:
        """Finish in-flight deliveries and release resources."""
        ...


class LogNotifier:
    """Write notifications to the log instead of sending them."""

    def notify(self, text: str) -> None:
        """Log ``text`` at INFO level."""
        logger.info("[NOTIFY] %s", text)

    async def aclose(self) -> None:
        """Nothing to release."""


class TelegramNotifier:
    """Deliver notifications to Telegram in background tasks.

    Each message is sent in its own task. A transient failure (network
    error, HTTP 429 or 5xx) is retried ``retries`` times, ``retry_delay``
    seconds apart. A permanent rejection such as malformed markup or an
    unknown chat is not retried. Either way the message is then logged
    and dropped.

    Args:
        client: Telegram client bound to the target chat.
        retries: Retries after the first failed attempt.
        retry_delay: Fixed delay in seconds between attempts.
        sleep: Coroutine used to wait between attempts.

    """

    def __init__(
        self,
        client: TelegramClient,
        *,
        retries: int = 5,
        retry_delay: float = 5.0,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        """Initialize the notifier.

        Args:
            client: Telegram client bound to the target chat.
            retries: Retries after the first failed attempt.
            retry_delay: Fixed delay in seconds between attempts.
            sleep: Coroutine used to wait between attempts.

        """
        self._client = client
        self._retries = retries
        self._retry_delay = retry_delay
        self._sleep = sleep
        self._pending: set[asyncio.Task[None]] = set()
        self.sent = 0
        self.dropped = 0

    @property
    def pending(self) -> int:
        """Return the number of deliveries still in flight."""
        return len(self._pending)

    def notify(self, text: str) -> None:
        """Schedule delivery of ``text`` without waiting for it.

        Must be called from inside a running event loop.
        """
        task = asyncio.create_task(self._deliver(text))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _deliver(self, text: str) -> None:
        """Send ``text``, retrying transient failures; log and drop on failure."""
        try:
            await retry_async(
                lambda: self._client.send_message(text),
                attempts=self._retries + 1,
                delay=self._retry_delay,
                retry_on=(TelegramTransportError,),
                description="Telegram sendMessage",
                sleep=self._sleep,
            )
        except TelegramTransportError:
            self.dropped += 1
            logger.exception("All %d Telegram attempts failed; dropping message", self._retries + 1)
            return
        except TelegramError as exc:
            self.dropped += 1
            logger.error("Telegram rejected message; dropping it: %s", exc)  # noqa: TRY400
            return
        self.sent += 1

    async def aclose(self) -> None:
        """Wait for in-flight deliveries, then close the Telegram client."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        await self._client.close()
