"""Osmosis LCD client for concentrated-liquidity pool data."""

from pool_monitor.clients.osmosis.client import OsmosisClient
from pool_monitor.clients.osmosis.exceptions import (
    OsmosisAPIError,
    OsmosisError,
    OsmosisTransportError,
    PoolResponseError,
)
from pool_monitor.clients.osmosis.models import PoolTick

__all__ = [
    "OsmosisAPIError",
    "OsmosisClient",
    "OsmosisError",
    "OsmosisTransportError",
    "PoolResponseError",
    "PoolTick",
]
