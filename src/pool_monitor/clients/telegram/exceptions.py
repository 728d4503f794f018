"""Exceptions for the Telegram Bot API client."""


class TelegramError(Exception):
    """Base exception for Telegram errors."""


class TelegramAPIError(TelegramError):
    """Failed ``sendMessage`` call.

    Raised for transport failures, HTTP error statuses and replies with
    ``"ok": false``. Telegram describes errors as
    ``{"ok": false, "error_code": 400, "description": "Bad Request: chat not found"}``.
    """

    def __init__(self, msg: str, status_code: int | None = None) -> None:
        """Initialize Telegram API error.

        Args:
            msg: Human-readable error message.
            status_code: HTTP status or Telegram ``error_code``, if known.

        """
        prefix = f"[{status_code}] " if status_code is not None else ""
        super().__init__(f"{prefix}{msg}")
        self.msg = msg
        self.status_code = status_code


class TelegramTransportError(TelegramAPIError):
    """Transient ``sendMessage`` failure that is worth retrying.

    Raised for network errors and for HTTP 429 and 5xx replies. Any other
    ``TelegramAPIError`` is a permanent rejection (bad markup, unknown chat,
    revoked token) and will fail the same way on every attempt.
    """
