"""Configuration dataclasses for the range monitor service.

Hold the static pool list, polling interval, LCD endpoint settings and
Telegram credentials. Immutable after construction; built once at startup
from a ``ConfigLoader`` by ``load_monitor_config``.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any, cast

from pool_monitor.core.config import ConfigError, ConfigLoader

_DEFAULT_POLLING_INTERVAL = 10.0
_DEFAULT_LCD_URL = "https://lcd.osmosis.zone"
_DEFAULT_TIMEOUT = 10.0
_DEFAULT_FETCH_ATTEMPTS = 3
_DEFAULT_FETCH_RETRY_DELAY = 0.3
_DEFAULT_FETCH_RETRY_MAX_DELAY = 3.0
_DEFAULT_NOTIFY_RETRIES = 5
_DEFAULT_NOTIFY_RETRY_DELAY = 5.0

_TRUE_VALUES = ("1", "true", "yes", "y", "on")
_FALSE_VALUES = ("0", "false", "no", "n", "off", "")


@dataclass(frozen=True)
class PoolConfig:
    """A monitored pool.

    Attributes:
        pool_id: Numeric pool identifier on Osmosis.
        threshold: Distance in ticks from a range boundary that triggers a
            proximity alert.
        display_name: Human-readable pool label (e.g. ``"OSMO/ATOM"``).

    """

    pool_id: int
    threshold: int
    display_name: str


@dataclass(frozen=True)
class OsmosisSettings:
    """LCD endpoint and fetch retry settings.

    Attributes:
        lcd_url: Base URL of the LCD REST gateway.
        timeout: Request timeout in seconds.
        fetch_attempts: Total attempts per pool fetch.
        fetch_retry_delay: Seconds before the first fetch retry.
        fetch_retry_max_delay: Cap on the exponential retry delay.

    """

    lcd_url: str = _DEFAULT_LCD_URL
    timeout: float = _DEFAULT_TIMEOUT
    fetch_attempts: int = _DEFAULT_FETCH_ATTEMPTS
    fetch_retry_delay: float = _DEFAULT_FETCH_RETRY_DELAY
    fetch_retry_max_delay: float = _DEFAULT_FETCH_RETRY_MAX_DELAY


@dataclass(frozen=True)
class TelegramSettings:
    """Telegram notification settings.

    Attributes:
        enabled: Send notifications to Telegram; when False they are only logged.
        bot_token: Bot API token.
        chat_id: Target chat id.
        retry_attempts: Retries after the first failed send.
        retry_delay: Fixed delay in seconds between send attempts.

    """

    enabled: bool = False
    bot_token: str = ""
    chat_id: str = ""
    retry_attempts: int = _DEFAULT_NOTIFY_RETRIES
    retry_delay: float = _DEFAULT_NOTIFY_RETRY_DELAY

    def require_credentials(self) -> None:
        """Check that an enabled notifier has a token and chat id.

        Raises:
            ConfigError: If Telegram is enabled without credentials.

        """
        if self.enabled and not (self.bot_token and self.chat_id):
            raise ConfigError(
                "telegram is enabled but bot_token or chat_id is missing "
                "(set TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID, or TELEGRAM_ENABLED=false)"
            )


@dataclass(frozen=True)
class MonitorConfig:
    """Immutable configuration for a monitoring session.

    Attributes:
        pools: Pools to monitor, in configuration order.
        polling_interval_seconds: Seconds between two polls of the same pool.
        osmosis: LCD endpoint settings.
        telegram: Notification settings.

    """

    pools: tuple[PoolConfig, ...]
    polling_interval_seconds: float = _DEFAULT_POLLING_INTERVAL
    osmosis: OsmosisSettings = OsmosisSettings()
    telegram: TelegramSettings = TelegramSettings()

    def __post_init__(self) -> None:
        """Validate pool list and interval.

        Raises:
            ConfigError: If the configuration is unusable.

        """
        if not self.pools:
            raise ConfigError("monitor.pools must list at least one pool")
        if self.polling_interval_seconds <= 0:
            msg = f"polling interval must be positive, got {self.polling_interval_seconds}"
            raise ConfigError(msg)
        seen: set[int] = set()
        for pool in self.pools:
            if pool.pool_id in seen:
                msg = f"pool {pool.pool_id} is configured more than once"
                raise ConfigError(msg)
            seen.add(pool.pool_id)
            if pool.threshold < 0:
                msg = f"pool {pool.pool_id}: threshold must be >= 0, got {pool.threshold}"
                raise ConfigError(msg)

    def without_telegram(self) -> "MonitorConfig":
        """Return a copy with Telegram notifications disabled."""
        return replace(self, telegram=replace(self.telegram, enabled=False))

    def with_interval(self, seconds: float) -> "MonitorConfig":
        """Return a copy with a different polling interval."""
        return replace(self, polling_interval_seconds=seconds)


def load_monitor_config(loader: ConfigLoader) -> MonitorConfig:
    """Build a validated ``MonitorConfig`` from loaded settings.

    Args:
        loader: Loader holding the merged YAML settings.

    Returns:
        The monitor configuration.

    Raises:
        ConfigError: If a value is missing, has the wrong type, or fails
            validation.

    """
    monitor = loader.get_section("monitor")
    osmosis = loader.get_section("osmosis")
    telegram = loader.get_section("telegram")

    raw_pools: Any = monitor.get("pools") or []
    if not isinstance(raw_pools, list):
        raise ConfigError("monitor.pools must be a list")
    pools = tuple(
        _parse_pool(index, entry)
        for index, entry in enumerate(cast("list[Any]", raw_pools))
    )

    return MonitorConfig(
        pools=pools,
        polling_interval_seconds=_as_float(
            monitor, "polling_interval_seconds", _DEFAULT_POLLING_INTERVAL, "monitor"
        ),
        osmosis=OsmosisSettings(
            lcd_url=str(osmosis.get("lcd_url") or _DEFAULT_LCD_URL),
            timeout=_as_float(osmosis, "timeout", _DEFAULT_TIMEOUT, "osmosis"),
            fetch_attempts=_as_int(osmosis, "fetch_attempts", _DEFAULT_FETCH_ATTEMPTS, "osmosis"),
            fetch_retry_delay=_as_float(
                osmosis, "fetch_retry_delay", _DEFAULT_FETCH_RETRY_DELAY, "osmosis"
            ),
            fetch_retry_max_delay=_as_float(
                osmosis, "fetch_retry_max_delay", _DEFAULT_FETCH_RETRY_MAX_DELAY, "osmosis"
            ),
        ),
        telegram=TelegramSettings(
            enabled=_as_bool(telegram.get("enabled", False), "telegram.enabled"),
            bot_token=str(telegram.get("bot_token") or ""),
            chat_id=str(telegram.get("chat_id") or ""),
            retry_attempts=_as_int(
                telegram, "retry_attempts", _DEFAULT_NOTIFY_RETRIES, "telegram"
            ),
            retry_delay=_as_float(
                telegram, "retry_delay", _DEFAULT_NOTIFY_RETRY_DELAY, "telegram"
            ),
        ),
    )


def _parse_pool(index: int, entry: Any) -> PoolConfig:
    """Convert one ``monitor.pools`` entry into a ``PoolConfig``."""
    if not isinstance(entry, dict):
        msg = f"monitor.pools[{index}] must be a mapping"
        raise ConfigError(msg)
    data = cast("dict[str, Any]", entry)
    where = f"monitor.pools[{index}]"
    if "pool_id" not in data:
        msg = f"{where} is missing pool_id"
        raise ConfigError(msg)
    pool_id = _as_int(data, "pool_id", 0, where)
    return PoolConfig(
        pool_id=pool_id,
        threshold=_as_int(data, "threshold", 0, where),
        display_name=str(data.get("display_name") or f"Pool {pool_id}"),
    )


def _as_int(section: Mapping[str, Any], key: str, default: int, where: str) -> int:
    value = section.get(key, default)
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        msg = f"{where}.{key} must be an integer, got {value!r}"
        raise ConfigError(msg)
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        msg = f"{where}.{key} must be an integer, got {value!r}"
        raise ConfigError(msg) from exc


def _as_float(section: Mapping[str, Any], key: str, default: float, where: str) -> float:
    value = section.get(key, default)
    if isinstance(value, bool):
        msg = f"{where}.{key} must be a number, got {value!r}"
        raise ConfigError(msg)
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        msg = f"{where}.{key} must be a number, got {value!r}"
        raise ConfigError(msg) from exc


def _as_bool(value: Any, where: str) -> bool:
    """Interpret YAML booleans and env-substituted strings such as ``"true"``."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    msg = f"{where} must be a boolean, got {value!r}"
    raise ConfigError(msg)
