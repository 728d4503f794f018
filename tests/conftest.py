"""Shared test configuration and fixtures."""

import os
from collections.abc import Iterator
from unittest.mock import patch

import pytest

_TEST_ENV_VARS = {
    "TELEGRAM_ENABLED": "false",
    "TELEGRAM_BOT_TOKEN": "",
    "TELEGRAM_CHAT_ID": "",
}


@pytest.fixture(autouse=True)
def _isolate_env_vars() -> Iterator[None]:  # pyright: ignore[reportUnusedFunction]
    """Keep real Telegram credentials out of the tests.

    The packaged ``settings.yaml`` reads ``${TELEGRAM_ENABLED:true}`` and the
    bot credentials from the environment (or a developer's ``.env``). Pin
    them to harmless values so loading the default config never points a
    test at a real chat.
    """
    with patch.dict(os.environ, _TEST_ENV_VARS):
        yield
