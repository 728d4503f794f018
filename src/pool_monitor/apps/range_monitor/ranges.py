"""Tick-range classification for concentrated-liquidity pools.

Place the current tick in its spacing-aligned range ``[lower, upper)``,
measure how close it sits to either boundary, count how many ranges it
moved since the previous poll, and decide which alert (if any) to raise.
Everything here is pure integer arithmetic with floored division, so
negative ticks land in the range below zero rather than being truncated
towards it.
"""

from dataclasses import dataclass
from enum import Enum


class Boundary(Enum):
    """Range boundary the current tick is close to."""

    LOWER = "lower"
    UPPER = "upper"


class Movement(Enum):
    """How the tick moved between two consecutive polls."""

    UNCHANGED = "unchanged"
    IN_RANGE = "in_range"
    NEW_RANGE = "new_range"


class AlertKind(Enum):
    """Notification to emit for an evaluation."""

    NEW_RANGE = "new_range"
    NEAR_THRESHOLD = "near_threshold"


@dataclass(frozen=True)
class TickRange:
    """Half-open tick interval ``[lower_tick, upper_tick)`` aligned to spacing."""

    lower_tick: int
    upper_tick: int

    def __contains__(self, tick: object) -> bool:
        """Return True if ``tick`` lies in ``[lower_tick, upper_tick)``."""
        return isinstance(tick, int) and self.lower_tick <= tick < self.upper_tick


@dataclass(frozen=True)
class RangeCheck:
    """Position of a tick within its range.

    Args:
        tick_range: The range containing the tick.
        near_boundary: Boundary within ``threshold`` ticks, or ``None``.

    """

    tick_range: TickRange
    near_boundary: Boundary | None

    @property
    def near_threshold(self) -> bool:
        """Return True when the tick is within threshold of either boundary."""
        return self.near_boundary is not None


@dataclass(frozen=True)
class RangeEvaluation:
    """Outcome of comparing one poll against the previous one.

    Args:
        previous_tick: Tick stored from the previous poll.
        current_tick: Tick fetched by this poll.
        tick_spacing: Pool tick spacing.
        threshold: Alert threshold in ticks.
        check: Range and boundary proximity of ``current_tick``.
        range_changes: Whole ranges crossed between the two ticks.
        movement: Classification of the move.
        alert: Notification to emit, or ``None``.

    """

    previous_tick: int
    current_tick: int
    tick_spacing: int
    threshold: int
    check: RangeCheck
    range_changes: int
    movement: Movement
    alert: AlertKind | None

    @property
    def tick_change(self) -> int:
        """Return the absolute tick delta between the two polls."""
        return abs(self.current_tick - self.previous_tick)

    @property
    def tick_range(self) -> TickRange:
        """Return the range containing the current tick."""
        return self.check.tick_range


def _require_spacing(tick_spacing: int) -> None:
    if tick_spacing <= 0:
        msg = f"tick_spacing must be positive, got {tick_spacing}"
        raise ValueError(msg)


def tick_range_for(current_tick: int, tick_spacing: int) -> TickRange:
    """Return the spacing-aligned range containing ``current_tick``.

    Args:
        current_tick: Tick to locate.
        tick_spacing: Pool tick spacing, must be positive.

    Returns:
        ``TickRange`` with ``lower_tick <= current_tick < upper_tick``.

    Raises:
        ValueError: If ``tick_spacing`` is not positive.

    """
    _require_spacing(tick_spacing)
    lower_tick = (current_tick // tick_spacing) * tick_spacing
    return TickRange(lower_tick=lower_tick, upper_tick=lower_tick + tick_spacing)


def check_range(current_tick: int, tick_spacing: int, threshold: int) -> RangeCheck:
    """Locate ``current_tick`` in its range and test boundary proximity.

    The lower boundary is tested first, so when ``threshold`` is wide enough
    to reach both boundaries the tick is reported as near ``lower``.

    Args:
        current_tick: Tick to locate.
        tick_spacing: Pool tick spacing, must be positive.
        threshold: Distance in ticks from a boundary that counts as "near".

    Returns:
        The range and the boundary the tick is near, if any.

    Raises:
        ValueError: If ``tick_spacing`` is not positive.

    """
    tick_range = tick_range_for(current_tick, tick_spacing)
    near: Boundary | None = None
    if current_tick <= tick_range.lower_tick + threshold:
        near = Boundary.LOWER
    elif current_tick >= tick_range.upper_tick - threshold:
        near = Boundary.UPPER
    return RangeCheck(tick_range=tick_range, near_boundary=near)


def num_range_changes(previous_tick: int, current_tick: int, tick_spacing: int) -> int:
    """Return how many whole tick spacings separate two ticks.

    Symmetric in its first two arguments.

    Raises:
        ValueError: If ``tick_spacing`` is not positive.

    """
    _require_spacing(tick_spacing)
    return abs(current_tick - previous_tick) // tick_spacing


def evaluate(
    previous_tick: int,
    current_tick: int,
    tick_spacing: int,
    threshold: int,
) -> RangeEvaluation:
    """Classify the move from ``previous_tick`` to ``current_tick``.

    Alert policy:
        1. More than one range crossed: ``AlertKind.NEW_RANGE``.
        2. Otherwise, tick moved and sits within ``threshold`` of a
           boundary: ``AlertKind.NEAR_THRESHOLD``.
        3. Otherwise no alert.

    Args:
        previous_tick: Tick stored from the previous poll.
        current_tick: Tick fetched by this poll.
        tick_spacing: Pool tick spacing, must be positive.
        threshold: Alert threshold in ticks.

    Returns:
        The full evaluation, including the alert decision.

    Raises:
        ValueError: If ``tick_spacing`` is not positive.

    """
    check = check_range(current_tick, tick_spacing, threshold)
    range_changes = num_range_changes(previous_tick, current_tick, tick_spacing)
    moved = current_tick != previous_tick

    alert: AlertKind | None = None
    if range_changes > 1:
        alert = AlertKind.NEW_RANGE
    elif moved and check.near_threshold:
        alert = AlertKind.NEAR_THRESHOLD

    if not moved:
        movement = Movement.UNCHANGED
    elif range_changes > 1:
        movement = Movement.NEW_RANGE
    else:
        movement = Movement.IN_RANGE

    return RangeEvaluation(
        previous_tick=previous_tick,
        current_tick=current_tick,
        tick_spacing=tick_spacing,
        threshold=threshold,
        check=check,
        range_changes=range_changes,
        movement=movement,
        alert=alert,
    )
