"""Typed data models for Osmosis concentrated-liquidity pools."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PoolTick:
    """Tick snapshot of a concentrated-liquidity pool.

    Produced fresh on every poll and never mutated.

    Args:
        pool_id: Numeric pool identifier.
        current_tick: Tick the pool price currently sits on (may be negative).
        tick_spacing: Granularity between usable ticks, always positive.

    """

    pool_id: int
    current_tick: int
    tick_spacing: int
