"""TelemetrySubmitter protocol shared by every backend."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from synctelemetry.events.models import SyncEvent


@typ.runtime_checkable
class TelemetrySubmitter(typ.Protocol):
    """Protocol for delivering one sync event to a telemetry backend.

    Implementations encode the event in their backend's wire format and
    transmit it synchronously. They are shared read-only between worker
    threads, so ``submit`` must not mutate submitter state.

    Examples
    --------
    >>> from synctelemetry.submitters import TelemetrySubmitter, resolve_submitter
    >>> submitter = resolve_submitter("eventstream.example.com")
    >>> isinstance(submitter, TelemetrySubmitter)
    True

    """

    def submit(self, event: SyncEvent) -> bool:
        """Deliver ``event`` to the backend.

        Parameters
        ----------
        event
            The sync event to deliver.

        Returns
        -------
        bool
            ``True`` when the backend accepted the event.

        Notes
        -----
        Implementations must not raise for transport failures, timeouts, or
        rejected responses; they log the problem and return ``False``.

        """
        ...
