"""Async HTTP client for the Telegram Bot API ``sendMessage`` method."""

import logging
from typing import Any

import httpx

from pool_monitor.clients.telegram.exceptions import TelegramAPIError, TelegramTransportError

logger = logging.getLogger(__name__)

_HTTP_BAD_REQUEST = 400
_HTTP_TOO_MANY_REQUESTS = 429
_HTTP_SERVER_ERROR = 500
_ERROR_BODY_PREVIEW = 300


class TelegramClient:
    """HTTP client that posts text messages to a single Telegram chat.

    Transient failures are raised as ``TelegramTransportError`` and
    permanent rejections as ``TelegramAPIError``; retry and drop policy
    belongs to the caller.

    Args:
        bot_token: Bot token issued by BotFather.
        chat_id: Target chat, group or channel id.
        base_url: Base URL for the Bot API.
        timeout: Request timeout in seconds.

    """

    BASE_URL = "https://api.telegram.org"

    def __init__(
        self,
        bot_token: str,
        chat_id: str,
        base_url: str = BASE_URL,
        timeout: float = 10.0,
    ) -> None:
        """Initialize the Telegram client.

        Args:
            bot_token: Bot token issued by BotFather.
            chat_id: Target chat, group or channel id.
            base_url: Base URL for the Bot API.
            timeout: Request timeout in seconds.

        """
        self.chat_id = chat_id
        self.base_url = base_url.rstrip("/")
        self._bot_url = f"{self.base_url}/bot{bot_token}"
        self._http_client = httpx.AsyncClient(timeout=timeout)

    async def send_message(
        self,
        text: str,
        *,
        parse_mode: str | None = "HTML",
        disable_web_page_preview: bool = True,
    ) -> int | None:
        """Send a text message to the configured chat.

        Args:
            text: Message body. With ``parse_mode="HTML"`` it may contain
                ``<b>``, ``<i>`` and ``<code>`` tags.
            parse_mode: Telegram parse mode, or ``None`` for plain text.
            disable_web_page_preview: Suppress link previews.

        Returns:
            The Telegram ``message_id`` of the sent message, if reported.

        Raises:
            TelegramTransportError: On network failure, HTTP 429 or 5xx.
            TelegramAPIError: On any other HTTP error or ``ok: false``.

        """
        payload: dict[str, Any] = {
            "chat_id": self.chat_id,
            "text": text,
            "disable_web_page_preview": disable_web_page_preview,
        }
        if parse_mode:
            payload["parse_mode"] = parse_mode

        data = await self._post("sendMessage", payload)
        result = data.get("result")
        message_id = result.get("message_id") if isinstance(result, dict) else None
        logger.debug("[TELEGRAM] sent msg_id=%s", message_id)
        return message_id

    async def _post(self, method: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST a JSON payload to a Bot API method and return the reply.

        Args:
            method: Bot API method name (e.g. ``sendMessage``).
            payload: JSON body.

        Returns:
            The decoded reply with ``"ok": true``.

        Raises:
            TelegramTransportError: On network failure, HTTP 429 or 5xx.
            TelegramAPIError: On any other HTTP error or ``ok: false``.

        """
        try:
            response = await self._http_client.request(
                "POST", f"{self._bot_url}/{method}", json=payload
            )
        except httpx.HTTPError as exc:
            # The URL embeds the bot token, so only the exception type is reported.
            msg = f"{method} transport error: {type(exc).__name__}"
            raise TelegramTransportError(msg) from exc

        try:
            data: Any = response.json()
        except ValueError:
            data = None

        if (
            response.status_code >= _HTTP_BAD_REQUEST
            or not isinstance(data, dict)
            or not data.get("ok")
        ):
            self._handle_error(response, data)
        return data  # pyright: ignore[reportUnknownVariableType]

    @staticmethod
    def _handle_error(response: httpx.Response, data: Any) -> None:
        """Raise a TelegramAPIError from a failed reply.

        Args:
            response: HTTP response from the Bot API.
            data: Decoded JSON body, or ``None`` if it was not JSON.

        Raises:
            TelegramTransportError: For HTTP 429 and 5xx replies.
            TelegramAPIError: For every other failed reply.

        """
        if isinstance(data, dict):
            code = data.get("error_code", response.status_code)
            msg = str(data.get("description", f"HTTP {response.status_code}"))
        else:
            code = response.status_code
            msg = f"HTTP {response.status_code}: {response.text[:_ERROR_BODY_PREVIEW]}"
        status = response.status_code
        if status == _HTTP_TOO_MANY_REQUESTS or status >= _HTTP_SERVER_ERROR:
            raise TelegramTransportError(msg=msg, status_code=code)
        raise TelegramAPIError(msg=msg, status_code=code)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http_client.aclose()

    async def __aenter__(self) -> "TelegramClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.close()
