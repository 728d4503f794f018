"""Settings loader for the pool monitor.

Read ``settings.yaml`` and an optional, uncommitted ``settings.local.yaml``
from one directory, merge them, and resolve ``${VAR}`` / ``${VAR:default}``
references against the environment. A ``.env`` file in the working
directory is loaded into the environment first, so Telegram credentials can
live there instead of in the YAML.
"""

import os
import re
from pathlib import Path
from typing import Any, cast

import yaml
from dotenv import load_dotenv

_SETTINGS_FILES = ("settings.yaml", "settings.local.yaml")
_ENV_REFERENCE = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


class ConfigError(Exception):
    """Raise when configuration loading or validation fails."""


class ConfigLoader:
    """Merged, environment-resolved view of the settings directory.

    Args:
        config_dir: Directory holding the settings files. Defaults to the
            ``config`` directory shipped inside the package.

    Raises:
        ConfigError: If a ``${VAR}`` reference cannot be resolved.

    """

    def __init__(self, config_dir: Path | None = None) -> None:
        """Load ``.env`` and the settings files from ``config_dir``."""
        load_dotenv()
        if config_dir is None:
            config_dir = Path(__file__).parent.parent / "config"
        self.config_dir = Path(config_dir)

        merged: dict[str, Any] = {}
        for name in _SETTINGS_FILES:
            path = self.config_dir / name
            if path.exists():
                with path.open() as f:
                    _merge(merged, cast("dict[str, Any]", yaml.safe_load(f) or {}))
        self._config = cast("dict[str, Any]", _resolve(merged))

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key, e.g. ``"telegram.chat_id"``.

        Args:
            key: Dotted path into the settings.
            default: Value returned when any part of the path is missing.

        Returns:
            The configured value, or ``default``.

        """
        current: Any = self._config
        for part in key.split("."):
            if not isinstance(current, dict):
                return default
            current = cast("dict[str, Any]", current).get(part)
            if current is None:
                return default
        return current

    def get_section(self, name: str) -> dict[str, Any]:
        """Get a top-level configuration section as a dictionary.

        Args:
            name: Section name (e.g. ``"osmosis"`` or ``"telegram"``).

        Returns:
            The section dictionary, empty when the section is absent.

        Raises:
            ConfigError: If the section exists but is not a dictionary.

        """
        result: Any = self.get(name, {})
        if isinstance(result, dict):
            return cast("dict[str, Any]", result)
        msg = f"{name} config must be a dict, got {type(result).__name__}"
        raise ConfigError(msg)


def _merge(base: dict[str, Any], override: dict[str, Any]) -> None:
    """Merge ``override`` into ``base`` in place.

    Nested mappings merge key by key; anything else, including the pool
    list, is replaced wholesale.
    """
    for key, value in override.items():
        if isinstance(base.get(key), dict) and isinstance(value, dict):
            _merge(base[key], cast("dict[str, Any]", value))
        else:
            base[key] = value


def _resolve(value: Any) -> Any:
    """Replace whole-string ``${VAR}`` / ``${VAR:default}`` values recursively.

    Raises:
        ConfigError: If a variable is unset and has no default, or a
            reference is embedded inside a larger string.

    """
    if isinstance(value, dict):
        return {k: _resolve(v) for k, v in cast("dict[str, Any]", value).items()}
    if isinstance(value, list):
        return [_resolve(item) for item in cast("list[Any]", value)]
    if not isinstance(value, str):
        return value

    match = _ENV_REFERENCE.fullmatch(value)
    if match is not None:
        name, default = match.group(1), match.group(2)
        resolved = os.getenv(name, default)
        if resolved is None:
            msg = f"Required environment variable ${{{name}}} is not set and has no default"
            raise ConfigError(msg)
        return resolved
    if _ENV_REFERENCE.search(value):
        msg = f"Unresolved environment variable reference in: {value}"
        raise ConfigError(msg)
    return value
