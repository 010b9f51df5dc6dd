"""Event stream backend: batching client and single-event adapter."""

from __future__ import annotations

from synctelemetry.submitters.stream.client import (
    EventStreamClient,
    EventStreamConfig,
    StreamEvent,
)
from synctelemetry.submitters.stream.submitter import StreamSubmitter

__all__ = [
    "EventStreamClient",
    "EventStreamConfig",
    "StreamEvent",
    "StreamSubmitter",
]
