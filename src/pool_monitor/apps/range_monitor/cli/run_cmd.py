"""CLI command for running the range monitor service.

Load the pool list from settings, start one polling task per pool and keep
running until SIGINT/SIGTERM.
"""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from pool_monitor.apps.range_monitor.cli._helpers import (
    build_notifier,
    build_osmosis_client,
    configure_logging,
    load_config_or_exit,
)
from pool_monitor.apps.range_monitor.config import MonitorConfig
from pool_monitor.apps.range_monitor.monitor import RangeMonitor
from pool_monitor.core.config import ConfigError


def run(
    config_dir: Annotated[
        Path | None, typer.Option(help="Directory containing settings.yaml")
    ] = None,
    interval: Annotated[
        float | None, typer.Option(help="Override the polling interval in seconds")
    ] = None,
    no_telegram: Annotated[  # noqa: FBT002
        bool, typer.Option("--no-telegram", help="Log alerts instead of sending them")
    ] = False,
    verbose: Annotated[  # noqa: FBT002
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """Monitor the configured pools and send tick-range alerts."""
    configure_logging(verbose=verbose)

    config = load_config_or_exit(config_dir)
    try:
        if interval is not None:
            config = config.with_interval(interval)
        if no_telegram:
            config = config.without_telegram()
        config.telegram.require_credentials()
    except ConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(
        f"Starting range monitor: {len(config.pools)} pools, "
        f"every {config.polling_interval_seconds:g}s"
    )
    if not config.telegram.enabled:
        typer.echo("Telegram disabled: alerts will only be logged")

    asyncio.run(_run(config))


async def _run(config: MonitorConfig) -> None:
    """Run the monitor and flush pending notifications on exit.

    Args:
        config: Validated monitor configuration.

    """
    notifier = build_notifier(config.telegram)
    try:
        async with build_osmosis_client(config.osmosis) as client:
            await RangeMonitor(config, client, notifier).run()
    finally:
        await notifier.aclose()
