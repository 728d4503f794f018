"""CLI subpackage for the range monitor app.

Create the Typer application and register all command modules.
"""

import typer

from pool_monitor.apps.range_monitor.cli.check_cmd import check
from pool_monitor.apps.range_monitor.cli.pools_cmd import pools
from pool_monitor.apps.range_monitor.cli.run_cmd import run

app = typer.Typer(help="Osmosis pool tick-range monitor")

app.command()(run)
app.command()(check)
app.command()(pools)

__all__ = ["app"]
