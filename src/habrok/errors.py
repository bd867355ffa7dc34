"""
Error types for habrok
"""
from typing import Any


class HabrokError(Exception):
    """Base class for errors raised by habrok itself."""


class HttpError(HabrokError):
    """
    Terminal error for an HTTP response with status >= 400.

    The message is the reason phrase of the status code. The response body
    travels along as ``data``.
    """

    is_http_error = True

    def __init__(
        self,
        status_code: int,
        reason: str,
        data: Any = None,
    ) -> None:
        super().__init__(reason)
        self.status_code = status_code
        self.reason = reason
        self.data = data

    @property
    def message(self) -> str:
        return str(self)

    @property
    def output(self) -> dict[str, Any]:
        """Serializable error payload."""
        return {
            "statusCode": self.status_code,
            "error": self.reason,
            "message": self.message,
        }

    def __repr__(self) -> str:
        return f"HttpError(status_code={self.status_code!r}, reason={self.reason!r})"
