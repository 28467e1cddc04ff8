"""Request context management using contextvars.

Holds the current request ID so log records emitted anywhere during the
request (cache lookups, replica queries) can be correlated.

Usage:
    token = set_request_id("abc123")
    request_id = get_request_id()
    reset_request_id(token)
"""

from contextvars import ContextVar, Token

_current_request_id: ContextVar[str | None] = ContextVar(
    "current_request_id", default=None
)


def set_request_id(request_id: str | None) -> Token[str | None]:
    """Set the request ID for the current task; returns a token for reset."""
    return _current_request_id.set(request_id)


def get_request_id() -> str | None:
    """Return the current request ID, or None outside a request."""
    return _current_request_id.get()


def reset_request_id(token: Token[str | None]) -> None:
    _current_request_id.reset(token)
