"""Shared helpers for range monitor CLI commands.

Centralise logging setup, config loading with CLI-friendly errors, and
construction of the Osmosis client and notifier from settings.
"""

import logging
from pathlib import Path

import typer

from pool_monitor.apps.range_monitor.config import (
    MonitorConfig,
    OsmosisSettings,
    TelegramSettings,
    load_monitor_config,
)
from pool_monitor.apps.range_monitor.notifier import LogNotifier, Notifier, TelegramNotifier
from pool_monitor.clients.osmosis.client import OsmosisClient
from pool_monitor.clients.telegram.client import TelegramClient
from pool_monitor.core.config import ConfigError, ConfigLoader


def configure_logging(*, verbose: bool) -> None:
    """Configure root logging; DEBUG also logs the tick table after every poll."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def load_config_or_exit(config_dir: Path | None) -> MonitorConfig:
    """Load the monitor configuration, exiting with code 1 on errors.

    Args:
        config_dir: Directory holding ``settings.yaml``, or ``None`` for the
            packaged default.

    Returns:
        The validated monitor configuration.

    """
    try:
        return load_monitor_config(ConfigLoader(config_dir=config_dir))
    except ConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def build_osmosis_client(settings: OsmosisSettings) -> OsmosisClient:
    """Build an ``OsmosisClient`` from LCD settings."""
    return OsmosisClient(
        base_url=settings.lcd_url,
        timeout=settings.timeout,
        attempts=settings.fetch_attempts,
        retry_delay=settings.fetch_retry_delay,
        retry_max_delay=settings.fetch_retry_max_delay,
    )


def build_notifier(settings: TelegramSettings) -> Notifier:
    """Build a Telegram notifier, or a log-only notifier when Telegram is disabled.

    Raises:
        ConfigError: If Telegram is enabled without a token or chat id.

    """
    settings.require_credentials()
    if not settings.enabled:
        return LogNotifier()
    client = TelegramClient(bot_token=settings.bot_token, chat_id=settings.chat_id)
    return TelegramNotifier(
        client,
        retries=settings.retry_attempts,
        retry_delay=settings.retry_delay,
    )
