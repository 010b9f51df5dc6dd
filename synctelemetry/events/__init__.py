"""Sync event model and builder.

Public API
----------
SyncEvent
    Immutable record submitted to telemetry backends.
SyncSucceeded, SyncFailed
    Variants of ``SyncResult`` describing a finished sync.
HostSnapshot
    Host and IDE facts supplied by the caller.
build_sync_event
    Combine a sync result and host facts into a ``SyncEvent``.

"""

from __future__ import annotations

from synctelemetry.events.builder import UNMEASURED, build_sync_event
from synctelemetry.events.models import (
    HostSnapshot,
    SyncEvent,
    SyncFailed,
    SyncResult,
    SyncSucceeded,
)

__all__ = [
    "UNMEASURED",
    "HostSnapshot",
    "SyncEvent",
    "SyncFailed",
    "SyncResult",
    "SyncSucceeded",
    "build_sync_event",
]
