"""Domain errors raised by the stylist session layer."""

from __future__ import annotations


class UnknownSessionError(KeyError):
    """Raised when a session id does not match any live stylist session."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Unknown session_id {session_id}")
        self.session_id = session_id


class ChatUnavailableError(RuntimeError):
    """Raised when the chat drawer is opened before any recommendation exists."""


__all__ = ["ChatUnavailableError", "UnknownSessionError"]
