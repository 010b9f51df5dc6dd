"""Synchronous stand-in for femtologging loggers in unit tests."""

from __future__ import annotations

import threading


class FakeLogger:
    """Collect ``log`` calls so tests can assert on level and message."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, object | None, bool]] = []
        self._lock = threading.Lock()

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str:
        """Record the call and echo the message like femtologging does."""
        with self._lock:
            self.calls.append((level, message, exc_info, stack_info))
        return message

    def messages(self, level: str) -> list[str]:
        """Return messages logged at ``level`` in call order."""
        with self._lock:
            return [message for lvl, message, _, _ in self.calls if lvl == level]
