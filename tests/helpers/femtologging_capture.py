"""Capture records emitted through real femtologging loggers."""

from __future__ import annotations

import contextlib
import dataclasses
import threading
import time
import typing as typ

from femtologging import get_logger


@dataclasses.dataclass(slots=True)
class CapturedRecord:
    """One record delivered by the femtologging worker thread."""

    logger: str
    level: str
    message: str
    exc_info: object | None = None


class LogCapture:
    """Handler collecting records; femtologging delivers them asynchronously."""

    def __init__(self) -> None:
        """Initialise storage and the condition used to wait for records."""
        self.records: list[CapturedRecord] = []
        self._condition = threading.Condition()

    def handle(self, logger: str, level: str, message: str) -> None:
        """Handle a plain record."""
        self._append(
            CapturedRecord(logger=str(logger), level=str(level), message=message)
        )

    def handle_record(self, record: dict[str, object]) -> None:
        """Handle a structured record, keeping any exception payload."""
        self._append(
            CapturedRecord(
                logger=str(record.get("logger", "")),
                level=str(record.get("level", "")),
                message=str(record.get("message", "")),
                exc_info=record.get("exc_info"),
            )
        )

    def _append(self, record: CapturedRecord) -> None:
        with self._condition:
            self.records.append(record)
            self._condition.notify_all()

    def wait_for_count(self, count: int, timeout: float = 1.0) -> list[CapturedRecord]:
        """Block until ``count`` records arrived and return them."""
        deadline = time.monotonic() + timeout
        with self._condition:
            while len(self.records) < count:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                self._condition.wait(timeout=remaining)
            captured = list(self.records)

        assert len(captured) >= count, f"Expected {count} records, got {len(captured)}"
        return captured


@contextlib.contextmanager
def capture_logs(logger_name: str, *, level: str = "DEBUG") -> typ.Iterator[LogCapture]:
    """Attach a ``LogCapture`` to ``logger_name`` for the duration of the block."""
    logger = get_logger(logger_name)
    previous_level = logger.level
    previous_propagate = logger.propagate

    logger.set_level(level)
    logger.set_propagate(False)
    handler = LogCapture()
    logger.add_handler(handler)
    try:
        yield handler
    finally:
        logger.remove_handler(handler)
        logger.set_level(previous_level)
        logger.set_propagate(previous_propagate)
