"""Tests for notification text formatting."""

import pytest

from pool_monitor.apps.range_monitor.config import PoolConfig
from pool_monitor.apps.range_monitor.messages import (
    format_alert,
    format_near_threshold,
    format_new_range,
    format_startup,
)
from pool_monitor.apps.range_monitor.ranges import evaluate

_POOL = PoolConfig(pool_id=1135, threshold=2, display_name="OSMO/ATOM")
_SPACING = 100


class TestFormatStartup:
    """Tests for the monitoring-started message."""

    def test_startup_message(self) -> None:
        """Name the pool and its threshold."""
        assert format_startup(_POOL) == "Monitoring started: Pool #1135 (OSMO/ATOM) [threshold = 2]"

    def test_display_name_is_escaped(self) -> None:
        """Escape HTML in display names."""
        pool = PoolConfig(pool_id=1, threshold=0, display_name="<A&B>")
        assert "(&lt;A&amp;B&gt;)" in format_startup(pool)


class TestFormatNewRange:
    """Tests for the new-tick-range message."""

    def test_new_range_message(self) -> None:
        """Show the new range, both ticks and the size of the jump."""
        text = format_new_range(_POOL, evaluate(150, 360, _SPACING, _POOL.threshold))

        assert text.startswith("<b>🆕 Pool 1135 (OSMO/ATOM) has a new tick range!</b>")
        assert "• New Range: 300 to 400" in text
        assert "• Previous Tick: 150" in text
        assert "• Current Tick: 360" in text
        assert "• Change: 210 ticks (2 ranges)" in text
        assert text.endswith("• Alert Threshold: 2 ticks")


class TestFormatNearThreshold:
    """Tests for the near-threshold message."""

    def test_near_upper_message(self) -> None:
        """Name the boundary and the threshold."""
        text = format_near_threshold(_POOL, evaluate(500, 498, _SPACING, _POOL.threshold))

        assert text.startswith("<b>⚠️ Pool 1135 (OSMO/ATOM) is near the upper threshold</b>")
        assert "• Range: 400 to 500" in text
        assert "• Current Tick: 498" in text
        assert "• Previous Tick: 500" in text
        assert "• Alert Threshold: 2 ticks" in text

    def test_near_lower_message(self) -> None:
        """Name the lower boundary."""
        text = format_near_threshold(_POOL, evaluate(450, 401, _SPACING, _POOL.threshold))
        assert "is near the lower threshold" in text

    def test_not_near_boundary_raises(self) -> None:
        """Refuse to format an evaluation that is not near a boundary."""
        with pytest.raises(ValueError, match="not near a boundary"):
            format_near_threshold(_POOL, evaluate(440, 450, _SPACING, _POOL.threshold))


class TestFormatAlert:
    """Tests for alert dispatch by kind."""

    def test_new_range(self) -> None:
        """Format new-range alerts."""
        text = format_alert(_POOL, evaluate(150, 360, _SPACING, _POOL.threshold))
        assert text is not None
        assert "new tick range" in text

    def test_near_threshold(self) -> None:
        """Format near-threshold alerts."""
        text = format_alert(_POOL, evaluate(500, 498, _SPACING, _POOL.threshold))
        assert text is not None
        assert "near the upper threshold" in text

    def test_no_alert(self) -> None:
        """Return None when there is nothing to report."""
        assert format_alert(_POOL, evaluate(440, 450, _SPACING, _POOL.threshold)) is None
