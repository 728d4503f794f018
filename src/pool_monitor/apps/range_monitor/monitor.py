"""Per-pool polling tasks for the range monitor.

Each configured pool gets its own ``PoolMonitor`` running in its own asyncio
task: fetch the tick snapshot, compare it with the previous one, hand any
alert to the notifier, record the new tick, sleep, repeat. ``RangeMonitor``
starts those tasks with staggered initial delays so the pools are not all
fetched at the same instant, and stops them on SIGINT/SIGTERM.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from typing import TYPE_CHECKING, Protocol

from pool_monitor.apps.range_monitor.messages import format_alert, format_startup
from pool_monitor.apps.range_monitor.ranges import Movement, RangeEvaluation, evaluate
from pool_monitor.apps.range_monitor.state import TickTable
from pool_monitor.clients.osmosis.exceptions import OsmosisError, PoolResponseError

if TYPE_CHECKING:
    from pool_monitor.apps.range_monitor.config import MonitorConfig, PoolConfig
    from pool_monitor.apps.range_monitor.notifier import Notifier
    from pool_monitor.clients.osmosis.models import PoolTick

logger = logging.getLogger(__name__)


class PoolTickFetcher(Protocol):
    """Source of tick snapshots, satisfied by ``OsmosisClient``."""

    async def get_pool_tick(self, pool_id: int) -> PoolTick:
        """Return the current tick snapshot for ``pool_id``."""
        ...


async def _wait(stop: asyncio.Event, seconds: float) -> bool:
    """Sleep up to ``seconds``, returning True early if ``stop`` is set."""
    if seconds <= 0:
        return stop.is_set()
    try:
        await asyncio.wait_for(stop.wait(), timeout=seconds)
    except TimeoutError:
        return False
    return True


class PoolMonitor:
    """Poll one pool and raise alerts when its tick range changes.

    Args:
        pool: Pool to monitor.
        fetcher: Source of tick snapshots.
        notifier: Sink for alert messages.
        table: Shared previous-tick table; only this monitor writes the
            pool's slot.

    """

    def __init__(
        self,
        pool: PoolConfig,
        fetcher: PoolTickFetcher,
        notifier: Notifier,
        table: TickTable,
    ) -> None:
        """Initialize the pool monitor."""
        self.pool = pool
        self._fetcher = fetcher
        self._notifier = notifier
        self._table = table

    async def poll_once(self) -> RangeEvaluation | None:
        """Run one poll: fetch, classify, notify, record.

        A failed fetch leaves the table untouched. The first successful poll
        only seeds the table.

        Returns:
            The evaluation, or ``None`` when the fetch failed or the poll
            only seeded the table.

        """
        pool_id = self.pool.pool_id
        try:
            snapshot = await self._fetcher.get_pool_tick(pool_id)
        except PoolResponseError as exc:
            logger.error("Malformed pool response, skipping poll: %s", exc)  # noqa: TRY400
            return None
        except OsmosisError as exc:
            logger.warning("Fetch failed for pool #%d, skipping poll: %s", pool_id, exc)
            return None

        previous = self._table.get(pool_id)
        if previous is None:
            self._table.record(pool_id, snapshot.current_tick)
            logger.info(
                "Pool #%d (%s) first tick %d (spacing %d)",
                pool_id,
                self.pool.display_name,
                snapshot.current_tick,
                snapshot.tick_spacing,
            )
            return None

        evaluation = evaluate(
            previous_tick=previous,
            current_tick=snapshot.current_tick,
            tick_spacing=snapshot.tick_spacing,
            threshold=self.pool.threshold,
        )
        self._log_evaluation(evaluation)

        text = format_alert(self.pool, evaluation)
        if text is not None:
            self._notifier.notify(text)

        self._table.record(pool_id, snapshot.current_tick)
        logger.debug("Previous ticks: %s", self._table.snapshot())
        return evaluation

    def _log_evaluation(self, evaluation: RangeEvaluation) -> None:
        if evaluation.movement is Movement.UNCHANGED:
            return
        prefix = "New tick range" if evaluation.movement is Movement.NEW_RANGE else "Tick change"
        logger.info(
            "#### %s > Pool %d (%s) | tick: %d -> %d | range: [%d, %d) | threshold: %d",
            prefix,
            self.pool.pool_id,
            self.pool.display_name,
            evaluation.previous_tick,
            evaluation.current_tick,
            evaluation.tick_range.lower_tick,
            evaluation.tick_range.upper_tick,
            self.pool.threshold,
        )

    async def run(
        self,
        interval: float,
        stop: asyncio.Event,
        initial_delay: float = 0.0,
    ) -> None:
        """Poll every ``interval`` seconds until ``stop`` is set.

        The next poll is scheduled only after the current one finishes, so
        polls of the same pool never overlap.

        Args:
            interval: Seconds to sleep between polls.
            stop: Event that ends the loop.
            initial_delay: Seconds to wait before the first poll.

        """
        startup = format_startup(self.pool)
        logger.info("%s", startup)
        self._notifier.notify(startup)

        if await _wait(stop, initial_delay):
            return
        while not stop.is_set():
            try:
                await self.poll_once()
            except Exception:
                logger.exception("Unexpected error polling pool #%d", self.pool.pool_id)
            if await _wait(stop, interval):
                return


class RangeMonitor:
    """Run one ``PoolMonitor`` task per configured pool.

    Args:
        config: Monitor configuration.
        fetcher: Source of tick snapshots shared by all pools.
        notifier: Sink for alert messages shared by all pools.
        table: Previous-tick table; a fresh one is created when omitted.

    """

    def __init__(
        self,
        config: MonitorConfig,
        fetcher: PoolTickFetcher,
        notifier: Notifier,
        table: TickTable | None = None,
    ) -> None:
        """Initialize the monitor and its per-pool monitors."""
        self._config = config
        self._stop = asyncio.Event()
        self.table = table if table is not None else TickTable()
        self.monitors = [
            PoolMonitor(pool, fetcher, notifier, self.table) for pool in config.pools
        ]

    def stagger_delay(self, index: int) -> float:
        """Return the initial delay for the pool at ``index``.

        Pools are spread evenly over one polling interval.
        """
        return index * self._config.polling_interval_seconds / len(self._config.pools)

    def stop(self) -> None:
        """Ask every pool task to finish after its current poll."""
        logger.info("Shutdown requested")
        self._stop.set()

    async def run(self, *, install_signal_handlers: bool = True) -> None:
        """Start all pool tasks and wait until they stop.

        Args:
            install_signal_handlers: Stop on SIGINT/SIGTERM.

        """
        loop = asyncio.get_running_loop()
        if install_signal_handlers:
            loop.add_signal_handler(signal.SIGINT, self.stop)
            loop.add_signal_handler(signal.SIGTERM, self.stop)

        logger.info(
            "Monitoring %d pools every %.1fs",
            len(self.monitors),
            self._config.polling_interval_seconds,
        )
        tasks = [
            asyncio.create_task(
                monitor.run(
                    self._config.polling_interval_seconds,
                    self._stop,
                    initial_delay=self.stagger_delay(index),
                ),
                name=f"pool-{monitor.pool.pool_id}",
            )
            for index, monitor in enumerate(self.monitors)
        ]
        try:
            await asyncio.gather(*tasks)
        finally:
            self._stop.set()
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            if install_signal_handlers:
                with contextlib.suppress(ValueError, RuntimeError):
                    loop.remove_signal_handler(signal.SIGINT)
                    loop.remove_signal_handler(signal.SIGTERM)
            logger.info("Range monitor stopped")
