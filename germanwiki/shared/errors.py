from __future__ import annotations

from typing import Any, Dict, Optional, Tuple


class UpstreamUnavailable(Exception):
    """The upstream wiki couldn't be reached or answered with an error."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        status_text: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.status_text = status_text

    def __repr__(self) -> str:
        return f"<UpstreamUnavailable status={self.status} message={self.message!r}>"


def format_upstream_error(
    error: Exception, fallback_message: str
) -> Tuple[int, Dict[str, Any]]:
    """Map an exception to the status code and body sent back to the caller."""

    if isinstance(error, UpstreamUnavailable):
        return error.status or 502, {
            "message": fallback_message,
            "upstreamStatus": error.status,
            "upstreamStatusText": error.status_text,
        }

    return 500, {"message": fallback_message}
