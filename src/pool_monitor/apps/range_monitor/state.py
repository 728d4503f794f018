"""In-memory table of the last observed tick per pool.

Owned by the ``RangeMonitor`` and shared with its ``PoolMonitor`` tasks.
Each pool's slot is written only by that pool's task, so no locking is
needed. Nothing is persisted: a restart seeds every pool again.
"""

from collections.abc import Iterator, Mapping


class TickTable(Mapping[int, int]):
    """Mapping of pool id to the tick seen on its last successful poll.

    Example::

        table = TickTable()
        table.get(1135)          # None: first poll, nothing to compare
        table.record(1135, -42)
        table[1135]              # -42

    """

    def __init__(self) -> None:
        """Initialize an empty table."""
        self._ticks: dict[int, int] = {}

    def record(self, pool_id: int, tick: int) -> None:
        """Store ``tick`` as the latest observation for ``pool_id``.

        Args:
            pool_id: Pool identifier.
            tick: Tick fetched by the most recent successful poll.

        """
        self._ticks[pool_id] = tick

    def snapshot(self) -> dict[int, int]:
        """Return a copy of the table for logging."""
        return dict(self._ticks)

    def __getitem__(self, pool_id: int) -> int:
        """Return the stored tick for ``pool_id``."""
        return self._ticks[pool_id]

    def __iter__(self) -> Iterator[int]:
        """Iterate over pool ids with a stored tick."""
        return iter(self._ticks)

    def __len__(self) -> int:
        """Return the number of pools with a stored tick."""
        return len(self._ticks)

    def __repr__(self) -> str:
        """Return a debug representation of the table."""
        return f"TickTable({self._ticks!r})"
