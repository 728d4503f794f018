"""Exception hierarchy for Osmosis LCD client errors.

Follow the same pattern as the other clients: a base exception class with
a specialised API error that carries status code and message attributes,
plus a response error for documents that do not have the expected shape.
"""


class OsmosisError(Exception):
    """Base exception for all Osmosis client errors."""


class OsmosisAPIError(OsmosisError):
    """Error returned by an Osmosis LCD call or raised by the transport.

    Args:
        msg: Human-readable description of the error.
        status_code: HTTP status code, or ``None`` for transport failures.

    """

    def __init__(self, msg: str, status_code: int | None = None) -> None:
        """Initialize Osmosis API error.

        Args:
            msg: Human-readable description of the error.
            status_code: HTTP status code, or ``None`` for transport failures.

        """
        prefix = f"[{status_code}] " if status_code is not None else ""
        super().__init__(f"{prefix}{msg}")
        self.msg = msg
        self.status_code = status_code


class PoolResponseError(OsmosisError):
    """A pool document was returned but is missing or has invalid tick fields.

    Args:
        pool_id: Identifier of the pool that was queried.
        msg: Description of what is wrong with the document.

    """

    def __init__(self, pool_id: int, msg: str) -> None:
        """Initialize pool response error.

        Args:
            pool_id: Identifier of the pool that was queried.
            msg: Description of what is wrong with the document.

        """
        super().__init__(f"Pool #{pool_id}: {msg}")
        self.pool_id = pool_id
        self.msg = msg


class OsmosisTransportError(OsmosisAPIError):
    """Transient LCD failure that is worth retrying.

    Raised for network errors, HTTP 429 and 5xx replies, and success
    replies whose body is not JSON (typically a proxy error page). Other
    4xx replies, such as ``pool not found``, are plain ``OsmosisAPIError``.
    """
