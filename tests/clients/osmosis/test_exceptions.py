"""Tests for the Osmosis client exception hierarchy."""

from pool_monitor.clients.osmosis.exceptions import (
    OsmosisAPIError,
    OsmosisError,
    OsmosisTransportError,
    PoolResponseError,
)

_STATUS = 503
_POOL_ID = 1220


class TestOsmosisExceptions:
    """Test suite for Osmosis exceptions."""

    def test_api_error_carries_status(self) -> None:
        """Prefix the message with the status code."""
        exc = OsmosisAPIError("unavailable", status_code=_STATUS)
        assert str(exc) == "[503] unavailable"
        assert exc.msg == "unavailable"
        assert exc.status_code == _STATUS

    def test_api_error_without_status(self) -> None:
        """Omit the prefix for transport failures."""
        exc = OsmosisAPIError("connection refused")
        assert str(exc) == "connection refused"
        assert exc.status_code is None

    def test_pool_response_error(self) -> None:
        """Name the pool in the message."""
        exc = PoolResponseError(_POOL_ID, "missing 'current_tick'")
        assert str(exc) == "Pool #1220: missing 'current_tick'"
        assert exc.pool_id == _POOL_ID

    def test_hierarchy(self) -> None:
        """Derive both errors from OsmosisError."""
        assert issubclass(OsmosisAPIError, OsmosisError)
        assert issubclass(PoolResponseError, OsmosisError)
        assert not issubclass(PoolResponseError, OsmosisAPIError)

    def test_transport_error_is_an_api_error(self) -> None:
        """Let callers that catch OsmosisAPIError also see transient failures."""
        exc = OsmosisTransportError("busy", status_code=_STATUS)
        assert isinstance(exc, OsmosisAPIError)
        assert str(exc) == "[503] busy"
