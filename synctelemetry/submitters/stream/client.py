"""Batching, retrying client for the event stream backend.

Events are grouped into batches of at most ``max_batch_size``, encoded as
MessagePack, and POSTed to the configured endpoint. Transport failures,
rate limiting, and 5xx responses are retried with a linear backoff; other
4xx responses are treated as permanent for that batch.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import time

import httpx
import msgspec

from synctelemetry.config import MAX_STREAM_BATCH_SIZE, HttpTimeouts
from synctelemetry.events.models import SyncEvent  # noqa: TC001 - msgspec field type
from synctelemetry.logging import get_logger, log_error, log_info, log_warning
from synctelemetry.submitters.errors import EventStreamConfigError

logger = get_logger(__name__)

_CONTENT_TYPE = "application/x-msgpack"
_HTTP_RATE_LIMITED = 429
_HTTP_SERVER_ERROR_THRESHOLD = 500


class StreamEvent(msgspec.Struct, kw_only=True, frozen=True):
    """Envelope filing one sync event under a catalog and application.

    Attributes
    ----------
    catalog_name
        Catalog the event belongs to.
    app_name
        Application that produced the event.
    event
        The sync event payload.

    """

    catalog_name: str
    app_name: str
    event: SyncEvent


class _StreamBatch(msgspec.Struct, kw_only=True, frozen=True):
    events: list[StreamEvent]


@dc.dataclass(frozen=True, slots=True)
class EventStreamConfig:
    """Configuration for ``EventStreamClient``.

    Attributes
    ----------
    endpoint
        Absolute HTTP(S) URL receiving event batches.
    max_batch_size
        Maximum events per request (1-500).
    max_retries
        Attempts per batch, including the first.
    retry_backoff_s
        Base delay between attempts; attempt ``n`` waits ``n`` times this.
    timeouts
        Per-request timeout budget.

    """

    endpoint: str
    max_batch_size: int = 100
    max_retries: int = 3
    retry_backoff_s: float = 0.5
    timeouts: HttpTimeouts = dc.field(default_factory=HttpTimeouts)

    def __post_init__(self) -> None:
        """Validate the endpoint and batching limits."""
        try:
            url = httpx.URL(self.endpoint)
        except httpx.InvalidURL as exc:
            raise EventStreamConfigError.invalid_endpoint(
                self.endpoint, str(exc)
            ) from exc
        if url.scheme not in {"http", "https"}:
            raise EventStreamConfigError.invalid_endpoint(
                self.endpoint, "scheme must be http or https"
            )
        if not url.host:
            raise EventStreamConfigError.invalid_endpoint(self.endpoint, "missing host")
        if not 1 <= self.max_batch_size <= MAX_STREAM_BATCH_SIZE:
            raise EventStreamConfigError.invalid_batch_size(
                self.max_batch_size, MAX_STREAM_BATCH_SIZE
            )
        if self.max_retries < 1:
            raise EventStreamConfigError.invalid_max_retries(self.max_retries)


def _batched(
    events: cabc.Sequence[StreamEvent], size: int
) -> cabc.Iterator[list[StreamEvent]]:
    for start in range(0, len(events), size):
        yield list(events[start : start + size])


def _is_retryable_status(status_code: int) -> bool:
    return (
        status_code == _HTTP_RATE_LIMITED
        or status_code >= _HTTP_SERVER_ERROR_THRESHOLD
    )


class EventStreamClient:
    """Deliver ``StreamEvent`` batches to the event stream endpoint.

    Parameters
    ----------
    config
        Endpoint and batching configuration.
    http_client
        Optional ``httpx.Client`` for testing. If not provided, the
        instance creates and owns its own client.
    sleep
        Delay function used between attempts; replaceable in tests.

    """

    def __init__(
        self,
        config: EventStreamConfig,
        *,
        http_client: httpx.Client | None = None,
        sleep: cabc.Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialise the client with validated configuration."""
        self._config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(
            timeout=config.timeouts.to_httpx(),
        )
        self._sleep = sleep
        self._encoder = msgspec.msgpack.Encoder()

    @property
    def config(self) -> EventStreamConfig:
        """Read-only access to the client configuration."""
        return self._config

    def close(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            self._client.close()

    def send_events(self, events: cabc.Sequence[StreamEvent]) -> bool:
        """Send ``events`` in as many batches as the batch cap requires.

        Parameters
        ----------
        events
            Envelopes to deliver, in order.

        Returns
        -------
        bool
            ``True`` when every batch was accepted. An empty sequence is
            trivially delivered.

        """
        delivered = True
        for batch in _batched(events, self._config.max_batch_size):
            if not self._send_batch(batch):
                delivered = False
        return delivered

    def _send_batch(self, batch: list[StreamEvent]) -> bool:
        body = self._encoder.encode(_StreamBatch(events=batch))
        attempts = self._config.max_retries

        for attempt in range(1, attempts + 1):
            outcome = self._attempt(body, attempt=attempt, size=len(batch))
            if outcome is not None:
                return outcome
            if attempt < attempts:
                self._sleep(self._config.retry_backoff_s * attempt)

        log_error(
            logger,
            "Event stream batch of %d events dropped after %d attempts",
            len(batch),
            attempts,
        )
        return False

    def _attempt(self, body: bytes, *, attempt: int, size: int) -> bool | None:
        """Post one batch; ``None`` means the attempt may be retried."""
        try:
            response = self._client.post(
                self._config.endpoint,
                content=body,
                headers={"Content-Type": _CONTENT_TYPE},
            )
        except httpx.HTTPError as exc:
            log_warning(
                logger,
                "Event stream request failed (attempt %d/%d): %s",
                attempt,
                self._config.max_retries,
                exc,
            )
            return None

        if response.is_success:
            log_info(logger, "Delivered %d events to the event stream", size)
            return True

        if _is_retryable_status(response.status_code):
            log_warning(
                logger,
                "Event stream returned HTTP %d (attempt %d/%d)",
                response.status_code,
                attempt,
                self._config.max_retries,
            )
            return None

        log_error(
            logger,
            "Event stream rejected batch of %d events with HTTP %d",
            size,
            response.status_code,
        )
        return False
