"""CLI command for checking a single pool's tick range.

Fetch the pool once and show the current tick, tick spacing, the range that
contains it and whether it sits within the threshold of a boundary.
"""

import asyncio
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

from pool_monitor.apps.range_monitor.cli._helpers import build_osmosis_client, load_config_or_exit
from pool_monitor.apps.range_monitor.config import OsmosisSettings
from pool_monitor.apps.range_monitor.ranges import check_range
from pool_monitor.clients.osmosis.exceptions import OsmosisError


def check(
    pool_id: int,
    threshold: Annotated[
        int | None,
        typer.Option(help="Boundary threshold in ticks [default: configured pool's, else 0]"),
    ] = None,
    lcd_url: Annotated[
        str | None, typer.Option(help="Override the configured Osmosis LCD base URL")
    ] = None,
    config_dir: Annotated[
        Path | None, typer.Option(help="Directory containing settings.yaml")
    ] = None,
) -> None:
    """Fetch one pool and show where its current tick sits in its range.

    Args:
        pool_id: Numeric Osmosis pool identifier.
        threshold: Boundary threshold in ticks; defaults to the configured
            pool's threshold, or 0 for an unconfigured pool.
        lcd_url: Osmosis LCD base URL overriding ``osmosis.lcd_url``.
        config_dir: Directory holding ``settings.yaml``.

    """
    if threshold is not None and threshold < 0:
        raise typer.BadParameter("must be >= 0", param_hint="'--threshold'")

    config = load_config_or_exit(config_dir)
    if threshold is None:
        configured = next((p for p in config.pools if p.pool_id == pool_id), None)
        threshold = configured.threshold if configured is not None else 0
    osmosis = config.osmosis if lcd_url is None else replace(config.osmosis, lcd_url=lcd_url)

    asyncio.run(_check(pool_id=pool_id, threshold=threshold, osmosis=osmosis))


async def _check(*, pool_id: int, threshold: int, osmosis: OsmosisSettings) -> None:
    """Fetch the pool and print its range details."""
    try:
        async with build_osmosis_client(osmosis) as client:
            snapshot = await client.get_pool_tick(pool_id)
    except OsmosisError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    result = check_range(snapshot.current_tick, snapshot.tick_spacing, threshold)
    near = result.near_boundary.value if result.near_boundary is not None else "no"

    typer.echo(f"Pool #{snapshot.pool_id}")
    typer.echo(f"Current tick: {snapshot.current_tick}")
    typer.echo(f"Tick spacing: {snapshot.tick_spacing}")
    typer.echo(
        f"Range:        [{result.tick_range.lower_tick}, {result.tick_range.upper_tick})"
    )
    typer.echo(f"Threshold:    {threshold}")
    typer.echo(f"Near bound:   {near}")
