"""Notification text for the range monitor.

Messages use Telegram's HTML parse mode: ``<b>`` for headings and a bullet
per line. Pool display names are escaped because they come from config.
"""

from html import escape

from pool_monitor.apps.range_monitor.config import PoolConfig
from pool_monitor.apps.range_monitor.ranges import AlertKind, RangeEvaluation


def _label(pool: PoolConfig) -> str:
    return f"Pool {pool.pool_id} ({escape(pool.display_name)})"


def format_startup(pool: PoolConfig) -> str:
    """Return the message sent when monitoring of ``pool`` begins."""
    return (
        f"Monitoring started: Pool #{pool.pool_id} ({escape(pool.display_name)}) "
        f"[threshold = {pool.threshold}]"
    )


def format_new_range(pool: PoolConfig, evaluation: RangeEvaluation) -> str:
    """Return the message for a tick that crossed more than one range."""
    tick_range = evaluation.tick_range
    return (
        f"<b>🆕 {_label(pool)} has a new tick range!</b>\n\n"
        f"• New Range: {tick_range.lower_tick} to {tick_range.upper_tick}\n"
        f"• Previous Tick: {evaluation.previous_tick}\n"
        f"• Current Tick: {evaluation.current_tick}\n"
        f"• Change: {evaluation.tick_change} ticks ({evaluation.range_changes} ranges)\n"
        f"• Alert Threshold: {evaluation.threshold} ticks"
    )


def format_near_threshold(pool: PoolConfig, evaluation: RangeEvaluation) -> str:
    """Return the message for a tick that moved to within threshold of a boundary.

    Raises:
        ValueError: If the evaluation is not near a boundary.

    """
    boundary = evaluation.check.near_boundary
    if boundary is None:
        msg = f"Pool {pool.pool_id}: evaluation is not near a boundary"
        raise ValueError(msg)
    tick_range = evaluation.tick_range
    return (
        f"<b>⚠️ {_label(pool)} is near the {boundary.value} threshold</b>\n\n"
        f"• Range: {tick_range.lower_tick} to {tick_range.upper_tick}\n"
        f"• Current Tick: {evaluation.current_tick}\n"
        f"• Previous Tick: {evaluation.previous_tick}\n"
        f"• Alert Threshold: {evaluation.threshold} ticks"
    )


def format_alert(pool: PoolConfig, evaluation: RangeEvaluation) -> str | None:
    """Return the notification text for an evaluation, or ``None`` if it raises no alert."""
    if evaluation.alert is AlertKind.NEW_RANGE:
        return format_new_range(pool, evaluation)
    if evaluation.alert is AlertKind.NEAR_THRESHOLD:
        return format_near_threshold(pool, evaluation)
    return None
