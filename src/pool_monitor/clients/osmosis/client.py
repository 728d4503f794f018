"""Async HTTP client for the Osmosis LCD pool-manager endpoint.

Fetch a pool document by id and extract the two integers the range monitor
needs: ``current_tick`` and ``tick_spacing``. The LCD encodes both as decimal
strings nested under a ``pool`` key, e.g.::

    {"pool": {"@type": "/osmosis.concentratedliquidity.v1beta1.Pool",
              "current_tick": "-14673411", "tick_spacing": "100", ...}}

"""

import logging
from typing import Any

import httpx

from pool_monitor.clients.osmosis.exceptions import (
    OsmosisAPIError,
    OsmosisTransportError,
    PoolResponseError,
)
from pool_monitor.clients.osmosis.models import PoolTick
from pool_monitor.core.retry import retry_async

logger = logging.getLogger(__name__)

_HTTP_BAD_REQUEST = 400
_HTTP_TOO_MANY_REQUESTS = 429
_HTTP_SERVER_ERROR = 500
_POOL_PATH = "/osmosis/poolmanager/v1beta1/pools/{pool_id}"


class OsmosisClient:
    """Async HTTP client for Osmosis concentrated-liquidity pool data.

    Transient failures (network errors, HTTP 429 and 5xx, non-JSON bodies)
    are retried with exponential backoff inside a single call. Other 4xx
    replies, such as an unknown pool id, and malformed documents are not.

    Args:
        base_url: Base URL of the LCD REST gateway.
        timeout: Request timeout in seconds.
        attempts: Total fetch attempts per call.
        retry_delay: Seconds before the first retry.
        retry_max_delay: Cap on the exponential retry delay.

    """

    BASE_URL = "https://lcd.osmosis.zone"

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = 10.0,
        *,
        attempts: int = 3,
        retry_delay: float = 0.3,
        retry_max_delay: float = 3.0,
    ) -> None:
        """Initialize the Osmosis client.

        Args:
            base_url: Base URL of the LCD REST gateway.
            timeout: Request timeout in seconds.
            attempts: Total fetch attempts per call.
            retry_delay: Seconds before the first retry.
            retry_max_delay: Cap on the exponential retry delay.

        """
        self.base_url = base_url.rstrip("/")
        self.attempts = attempts
        self.retry_delay = retry_delay
        self.retry_max_delay = retry_max_delay
        self._http_client = httpx.AsyncClient(timeout=timeout)

    async def get_pool(self, pool_id: int) -> dict[str, Any]:
        """Fetch the raw pool document for a pool id.

        Args:
            pool_id: Numeric pool identifier.

        Returns:
            The dictionary found under the response's ``pool`` key.

        Raises:
            OsmosisTransportError: When every attempt fails transiently.
            OsmosisAPIError: When the LCD rejects the request.
            PoolResponseError: When the response has no ``pool`` object.

        """
        data = await retry_async(
            lambda: self._get(_POOL_PATH.format(pool_id=pool_id)),
            attempts=self.attempts,
            delay=self.retry_delay,
            backoff=2.0,
            max_delay=self.retry_max_delay,
            retry_on=(OsmosisTransportError,),
            description=f"Fetch pool #{pool_id}",
        )
        if not isinstance(data, dict) or not isinstance(data.get("pool"), dict):
            raise PoolResponseError(pool_id, "response has no 'pool' object")
        pool: dict[str, Any] = data["pool"]
        return pool

    async def get_pool_tick(self, pool_id: int) -> PoolTick:
        """Fetch a pool and return its current tick and tick spacing.

        Args:
            pool_id: Numeric pool identifier.

        Returns:
            A fresh ``PoolTick`` snapshot.

        Raises:
            OsmosisAPIError: When the fetch fails (see ``get_pool``).
            PoolResponseError: When the document is malformed or the tick
                spacing is not a positive integer.

        """
        pool = await self.get_pool(pool_id)
        current_tick = _parse_int(pool_id, pool, "current_tick")
        tick_spacing = _parse_int(pool_id, pool, "tick_spacing")
        if tick_spacing <= 0:
            raise PoolResponseError(pool_id, f"tick_spacing must be positive, got {tick_spacing}")
        logger.debug(
            "Pool #%d current_tick=%d tick_spacing=%d", pool_id, current_tick, tick_spacing
        )
        return PoolTick(pool_id=pool_id, current_tick=current_tick, tick_spacing=tick_spacing)

    async def _get(self, path: str) -> Any:
        """Send a GET request and return parsed JSON.

        Args:
            path: Request path relative to base_url.

        Returns:
            Parsed JSON response.

        Raises:
            OsmosisTransportError: On network failures, HTTP 429 and 5xx, and
                bodies that are not JSON.
            OsmosisAPIError: On any other HTTP error status.

        """
        url = f"{self.base_url}{path}"
        try:
            response = await self._http_client.request("GET", url)
        except httpx.HTTPError as exc:
            raise OsmosisTransportError(f"Request to {url} failed: {exc}") from exc

        if response.status_code >= _HTTP_BAD_REQUEST:
            self._handle_error(response)

        try:
            result: Any = response.json()
        except ValueError as exc:
            msg = f"Response from {url} is not valid JSON"
            raise OsmosisTransportError(msg, status_code=response.status_code) from exc
        return result

    @staticmethod
    def _handle_error(response: httpx.Response) -> None:
        """Raise an OsmosisAPIError from an error response.

        The LCD returns gRPC-gateway errors as ``{"code": 5, "message": "..."}``.

        Args:
            response: HTTP response with a non-2xx status code.

        Raises:
            OsmosisTransportError: For HTTP 429 and 5xx replies.
            OsmosisAPIError: For every other error status.

        """
        try:
            data = response.json()
            msg = str(data.get("message", f"HTTP {response.status_code}"))
        except Exception:
            msg = f"HTTP {response.status_code}"
        status = response.status_code
        if status == _HTTP_TOO_MANY_REQUESTS or status >= _HTTP_SERVER_ERROR:
            raise OsmosisTransportError(msg=msg, status_code=status)
        raise OsmosisAPIError(msg=msg, status_code=status)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http_client.aclose()

    async def __aenter__(self) -> "OsmosisClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.close()


def _parse_int(pool_id: int, pool: dict[str, Any], field: str) -> int:
    """Read an integer field that the LCD may encode as a string or a number.

    Args:
        pool_id: Pool identifier, used in error messages.
        pool: Pool document.
        field: Name of the field to read.

    Returns:
        The field value as an ``int``.

    Raises:
        PoolResponseError: If the field is missing or not an integer.

    """
    if field not in pool or pool[field] is None:
        raise PoolResponseError(pool_id, f"missing '{field}'")
    value = pool[field]
    if isinstance(value, bool):
        raise PoolResponseError(pool_id, f"'{field}' is not an integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise PoolResponseError(pool_id, f"'{field}' is not an integer: {value!r}")
