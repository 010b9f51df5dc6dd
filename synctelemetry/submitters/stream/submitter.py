"""Event stream implementation of the ``TelemetrySubmitter`` protocol."""

from __future__ import annotations

import typing as typ

from synctelemetry.submitters.stream.client import StreamEvent

if typ.TYPE_CHECKING:
    from synctelemetry.events.models import SyncEvent
    from synctelemetry.submitters.stream.client import EventStreamClient

DEFAULT_CATALOG_NAME = "telemetry_android"
DEFAULT_APP_NAME = "sync-telemetry"


class StreamSubmitter:
    """Adapt ``EventStreamClient`` to the single-event submitter interface.

    Batching, retries, and encoding stay with the client; this class only
    wraps each event in a batch of one.

    Parameters
    ----------
    client
        Client delivering envelopes to the event stream endpoint. The
        submitter takes ownership and closes it in ``close``.
    catalog_name
        Catalog the events are filed under.
    app_name
        Application name attached to every event.

    """

    def __init__(
        self,
        client: EventStreamClient,
        *,
        catalog_name: str = DEFAULT_CATALOG_NAME,
        app_name: str = DEFAULT_APP_NAME,
    ) -> None:
        """Initialise the adapter around an event stream client."""
        self._client = client
        self._catalog_name = catalog_name
        self._app_name = app_name

    @property
    def client(self) -> EventStreamClient:
        """Read-only access to the wrapped client."""
        return self._client

    def close(self) -> None:
        """Close the wrapped client."""
        self._client.close()

    def submit(self, event: SyncEvent) -> bool:
        """Send ``event`` through the event stream client.

        Returns
        -------
        bool
            The client's delivery result, unchanged.

        """
        envelope = StreamEvent(
            catalog_name=self._catalog_name,
            app_name=self._app_name,
            event=event,
        )
        return self._client.send_events([envelope])
