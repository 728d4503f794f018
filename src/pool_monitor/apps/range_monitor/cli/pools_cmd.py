"""CLI command for listing the configured pools."""

from pathlib import Path
from typing import Annotated

import typer

from pool_monitor.apps.range_monitor.cli._helpers import load_config_or_exit


def pools(
    config_dir: Annotated[
        Path | None, typer.Option(help="Directory containing settings.yaml")
    ] = None,
) -> None:
    """List the pools the monitor would watch."""
    config = load_config_or_exit(config_dir)

    typer.echo(f"{'Pool':>6} {'Threshold':>10}  Name")
    typer.echo("-" * 40)
    for pool in config.pools:
        typer.echo(f"{pool.pool_id:>6} {pool.threshold:>10}  {pool.display_name}")
    typer.echo("")
    typer.echo(f"Polling interval: {config.polling_interval_seconds:g}s")
    typer.echo(f"Telegram:         {'enabled' if config.telegram.enabled else 'disabled'}")
