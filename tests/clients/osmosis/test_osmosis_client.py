"""Tests for the Osmosis LCD HTTP client."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from pool_monitor.clients.osmosis.client import OsmosisClient
from pool_monitor.clients.osmosis.exceptions import (
    OsmosisAPIError,
    OsmosisTransportError,
    PoolResponseError,
)
from pool_monitor.clients.osmosis.models import PoolTick

_POOL_ID = 1135
_CURRENT_TICK = -14673411
_TICK_SPACING = 100
_NOT_FOUND = 404
_SERVER_ERROR = 500
_UNAVAILABLE = 503
_TOO_MANY_REQUESTS = 429
_ATTEMPTS = 3


def _make_response(status_code: int = 200, body: Any = None) -> MagicMock:
    """Create a mock httpx response returning ``body`` as JSON."""
    response = MagicMock()
    response.status_code = status_code
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


def _pool_body(**overrides: Any) -> dict[str, Any]:
    """Create an LCD pool document with string-encoded ticks."""
    pool: dict[str, Any] = {
        "@type": "/osmosis.concentratedliquidity.v1beta1.Pool",
        "id": str(_POOL_ID),
        "current_tick": str(_CURRENT_TICK),
        "tick_spacing": str(_TICK_SPACING),
    }
    pool.update(overrides)
    return {"pool": pool}


class TestOsmosisClient:
    """Test suite for the Osmosis LCD client."""

    @pytest.fixture
    def client(self) -> OsmosisClient:
        """Create an OsmosisClient that retries without waiting."""
        return OsmosisClient(base_url="https://lcd.example.com", attempts=_ATTEMPTS, retry_delay=0)

    def test_client_initialization(self) -> None:
        """Use the public LCD by default."""
        client = OsmosisClient()
        assert client.base_url == "https://lcd.osmosis.zone"

    def test_trailing_slash_stripped(self) -> None:
        """Strip a trailing slash from the base URL."""
        client = OsmosisClient(base_url="https://lcd.example.com/")
        assert client.base_url == "https://lcd.example.com"

    @pytest.mark.asyncio
    async def test_get_pool_tick(self, client: OsmosisClient) -> None:
        """Parse string-encoded ticks from the pool document."""
        response = _make_response(body=_pool_body())

        with patch.object(
            client._http_client, "request", new=AsyncMock(return_value=response)
        ) as mock_request:
            result = await client.get_pool_tick(_POOL_ID)

        assert result == PoolTick(
            pool_id=_POOL_ID, current_tick=_CURRENT_TICK, tick_spacing=_TICK_SPACING
        )
        mock_request.assert_awaited_once_with(
            "GET", f"https://lcd.example.com/osmosis/poolmanager/v1beta1/pools/{_POOL_ID}"
        )

    @pytest.mark.asyncio
    async def test_get_pool_tick_accepts_numbers(self, client: OsmosisClient) -> None:
        """Accept ticks encoded as JSON numbers."""
        response = _make_response(body=_pool_body(current_tick=498, tick_spacing=100))

        with patch.object(client._http_client, "request", new=AsyncMock(return_value=response)):
            result = await client.get_pool_tick(_POOL_ID)

        assert result.current_tick == 498
        assert result.tick_spacing == _TICK_SPACING

    @pytest.mark.asyncio
    async def test_get_pool_returns_inner_document(self, client: OsmosisClient) -> None:
        """Return the object nested under the ``pool`` key."""
        response = _make_response(body=_pool_body())

        with patch.object(client._http_client, "request", new=AsyncMock(return_value=response)):
            pool = await client.get_pool(_POOL_ID)

        assert pool["id"] == str(_POOL_ID)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("body", "match"),
        [
            ({"pools": []}, "no 'pool' object"),
            ({"pool": "1135"}, "no 'pool' object"),
            ([], "no 'pool' object"),
            (_pool_body(current_tick=None), "missing 'current_tick'"),
            ({"pool": {"tick_spacing": "100"}}, "missing 'current_tick'"),
            ({"pool": {"current_tick": "5"}}, "missing 'tick_spacing'"),
            (_pool_body(current_tick="12.5"), "'current_tick' is not an integer"),
            (_pool_body(current_tick=12.5), "'current_tick' is not an integer"),
            (_pool_body(tick_spacing=True), "'tick_spacing' is not an integer"),
            (_pool_body(tick_spacing="0"), "tick_spacing must be positive"),
            (_pool_body(tick_spacing="-100"), "tick_spacing must be positive"),
        ],
    )
    async def test_malformed_document_raises(
        self, client: OsmosisClient, body: Any, match: str
    ) -> None:
        """Raise PoolResponseError for malformed documents without retrying."""
        response = _make_response(body=body)

        with (
            patch.object(
                client._http_client, "request", new=AsyncMock(return_value=response)
            ) as mock_request,
            pytest.raises(PoolResponseError, match=match) as exc_info,
        ):
            await client.get_pool_tick(_POOL_ID)

        assert exc_info.value.pool_id == _POOL_ID
        mock_request.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_pool_is_not_retried(self, client: OsmosisClient) -> None:
        """Raise OsmosisAPIError with the gRPC-gateway message on the first 404."""
        response = _make_response(
            status_code=_NOT_FOUND,
            body={"code": 5, "message": "pool not found", "details": []},
        )

        with (
            patch.object(
                client._http_client, "request", new=AsyncMock(return_value=response)
            ) as mock_request,
            pytest.raises(OsmosisAPIError, match="pool not found") as exc_info,
        ):
            await client.get_pool_tick(_POOL_ID)

        assert exc_info.value.status_code == _NOT_FOUND
        assert not isinstance(exc_info.value, OsmosisTransportError)
        mock_request.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [_TOO_MANY_REQUESTS, _SERVER_ERROR, _UNAVAILABLE])
    async def test_transient_status_is_retried(
        self, client: OsmosisClient, status_code: int
    ) -> None:
        """Retry rate-limit and server-error replies until one succeeds."""
        busy = _make_response(status_code=status_code, body={"message": "busy"})
        good = _make_response(body=_pool_body())

        with patch.object(
            client._http_client, "request", new=AsyncMock(side_effect=[busy, good])
        ) as mock_request:
            result = await client.get_pool_tick(_POOL_ID)

        assert result.current_tick == _CURRENT_TICK
        assert mock_request.await_count == 2

    @pytest.mark.asyncio
    async def test_error_non_json_body(self, client: OsmosisClient) -> None:
        """Fall back to the status code when the error body is not JSON."""
        response = _make_response(status_code=_SERVER_ERROR, body=ValueError("not json"))

        with (
            patch.object(client._http_client, "request", new=AsyncMock(return_value=response)),
            pytest.raises(OsmosisTransportError, match="HTTP 500"),
        ):
            await client.get_pool_tick(_POOL_ID)

    @pytest.mark.asyncio
    async def test_invalid_json_success_body_is_retried(self, client: OsmosisClient) -> None:
        """Treat a 200 response that is not JSON as a retryable API error."""
        bad = _make_response(body=ValueError("not json"))
        good = _make_response(body=_pool_body())

        with patch.object(
            client._http_client, "request", new=AsyncMock(side_effect=[bad, good])
        ) as mock_request:
            result = await client.get_pool_tick(_POOL_ID)

        assert result.current_tick == _CURRENT_TICK
        assert mock_request.await_count == 2

    @pytest.mark.asyncio
    async def test_transport_error_is_retried(self, client: OsmosisClient) -> None:
        """Retry transport errors and return the first good response."""
        good = _make_response(body=_pool_body())
        side_effect = [httpx.ConnectError("refused"), httpx.ReadTimeout("slow"), good]

        with patch.object(
            client._http_client, "request", new=AsyncMock(side_effect=side_effect)
        ) as mock_request:
            result = await client.get_pool_tick(_POOL_ID)

        assert result.tick_spacing == _TICK_SPACING
        assert mock_request.await_count == _ATTEMPTS

    @pytest.mark.asyncio
    async def test_transport_error_exhausts_attempts(self, client: OsmosisClient) -> None:
        """Raise OsmosisAPIError when every attempt hits a transport error."""
        with (
            patch.object(
                client._http_client,
                "request",
                new=AsyncMock(side_effect=httpx.ConnectError("refused")),
            ),
            pytest.raises(OsmosisTransportError, match="refused") as exc_info,
        ):
            await client.get_pool_tick(_POOL_ID)

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_context_manager(self) -> None:
        """Use the client as an async context manager."""
        async with OsmosisClient() as client:
            assert client is not None

    @pytest.mark.asyncio
    async def test_close_client(self, client: OsmosisClient) -> None:
        """Close the underlying HTTP client."""
        with patch.object(client._http_client, "aclose", new=AsyncMock()) as mock_close:
            await client.close()
            mock_close.assert_called_once()
