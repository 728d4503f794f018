"""Tick-range monitoring for Osmosis concentrated-liquidity pools."""

__version__ = "0.1.0"
