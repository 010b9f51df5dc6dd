"""Unit tests for the batching event stream client."""

from __future__ import annotations

import typing as typ

import httpx
import msgspec
import pytest

from synctelemetry.submitters.errors import EventStreamConfigError
from synctelemetry.submitters.stream import (
    EventStreamClient,
    EventStreamConfig,
    StreamEvent,
)
from synctelemetry.submitters.stream import client as client_module
from tests.helpers.fake_logger import FakeLogger

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from synctelemetry.events import SyncEvent

_ENDPOINT = "https://eventstream.example.com/events"


@pytest.fixture
def fake_logger(monkeypatch: pytest.MonkeyPatch) -> FakeLogger:
    """Replace the client's logger with a recording fake."""
    logger = FakeLogger()
    monkeypatch.setattr(client_module, "logger", logger)
    return logger


def _envelopes(event: SyncEvent, count: int) -> list[StreamEvent]:
    return [
        StreamEvent(
            catalog_name="telemetry_android", app_name="sync-telemetry", event=event
        )
        for _ in range(count)
    ]


def _client(
    handler: cabc.Callable[[httpx.Request], httpx.Response],
    *,
    sleeps: list[float] | None = None,
    **config: typ.Any,  # noqa: ANN401 - forwarded to EventStreamConfig
) -> EventStreamClient:
    recorded = sleeps if sleeps is not None else []
    return EventStreamClient(
        EventStreamConfig(endpoint=_ENDPOINT, **config),
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
        sleep=recorded.append,
    )


class TestEventStreamConfig:
    """Tests for ``EventStreamConfig`` validation."""

    @pytest.mark.parametrize(
        "endpoint",
        [
            "eventstream.example.com",
            "ftp://eventstream.example.com",
            "https://",
            "https://eventstream.example.com:notaport",
        ],
    )
    def test_rejects_invalid_endpoints(self, endpoint: str) -> None:
        """Endpoints must be absolute HTTP(S) URLs with a host."""
        with pytest.raises(EventStreamConfigError, match="Invalid event stream"):
            EventStreamConfig(endpoint=endpoint)

    @pytest.mark.parametrize("size", [0, -1, 501])
    def test_rejects_out_of_range_batch_size(self, size: int) -> None:
        """Batch sizes must stay within 1-500."""
        with pytest.raises(EventStreamConfigError, match="batch size"):
            EventStreamConfig(endpoint=_ENDPOINT, max_batch_size=size)

    def test_rejects_non_positive_retries(self) -> None:
        """At least one attempt per batch is required."""
        with pytest.raises(EventStreamConfigError, match="max retries"):
            EventStreamConfig(endpoint=_ENDPOINT, max_retries=0)

    def test_defaults(self) -> None:
        """Defaults match the documented batching behaviour."""
        config = EventStreamConfig(endpoint="http://localhost:8080/events")

        assert (config.max_batch_size, config.max_retries) == (100, 3)


class TestSendEvents:
    """Tests for ``EventStreamClient.send_events``."""

    def test_posts_msgpack_batch(
        self, sync_event: SyncEvent, fake_logger: FakeLogger
    ) -> None:
        """A batch is POSTed as MessagePack with the envelope fields."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200)

        client = _client(handler)

        assert client.send_events(_envelopes(sync_event, 2)) is True
        assert len(requests) == 1
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == _ENDPOINT
        assert request.headers["Content-Type"] == "application/x-msgpack"

        body = msgspec.msgpack.decode(request.content)
        assert len(body["events"]) == 2
        first = body["events"][0]
        assert first["catalog_name"] == "telemetry_android"
        assert first["app_name"] == "sync-telemetry"
        assert first["event"]["sync_type"] == "succeeded"
        assert first["event"]["number_of_modules"] == 42
        assert first["event"]["error_message"] is None

    def test_splits_into_batches(
        self, sync_event: SyncEvent, fake_logger: FakeLogger
    ) -> None:
        """Events are sent in order in batches no larger than the cap."""
        sizes: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            sizes.append(len(msgspec.msgpack.decode(request.content)["events"]))
            return httpx.Response(202)

        client = _client(handler, max_batch_size=2)

        assert client.send_events(_envelopes(sync_event, 5)) is True
        assert sizes == [2, 2, 1]

    def test_empty_sequence_sends_nothing(self, fake_logger: FakeLogger) -> None:
        """No events means no request and a successful result."""

        def handler(_request: httpx.Request) -> httpx.Response:
            pytest.fail("No request expected for an empty batch")

        assert _client(handler).send_events([]) is True

    @pytest.mark.parametrize("status_code", [429, 500, 503])
    def test_retries_retryable_statuses_with_linear_backoff(
        self,
        sync_event: SyncEvent,
        fake_logger: FakeLogger,
        status_code: int,
    ) -> None:
        """Rate limiting and server errors are retried, then succeed."""
        responses = iter([status_code, status_code, 200])
        sleeps: list[float] = []

        def handler(_request: httpx.Request) -> httpx.Response:
            return httpx.Response(next(responses))

        client = _client(handler, sleeps=sleeps, retry_backoff_s=0.5)

        assert client.send_events(_envelopes(sync_event, 1)) is True
        assert sleeps == [0.5, 1.0]
        assert len(fake_logger.messages("WARNING")) == 2

    def test_gives_up_after_max_retries(
        self, sync_event: SyncEvent, fake_logger: FakeLogger
    ) -> None:
        """A batch that never succeeds is dropped after the attempt budget."""
        calls = 0

        def handler(_request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            raise httpx.ConnectError("connection refused")

        sleeps: list[float] = []
        client = _client(handler, sleeps=sleeps, max_retries=3)

        assert client.send_events(_envelopes(sync_event, 1)) is False
        assert calls == 3
        assert len(sleeps) == 2, "No delay after the final attempt"
        assert fake_logger.messages("ERROR") == [
            "Event stream batch of 1 events dropped after 3 attempts"
        ]

    @pytest.mark.parametrize("status_code", [400, 401, 404, 413])
    def test_client_errors_are_not_retried(
        self,
        sync_event: SyncEvent,
        fake_logger: FakeLogger,
        status_code: int,
    ) -> None:
        """Other 4xx responses fail the batch immediately."""
        calls = 0

        def handler(_request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(status_code)

        client = _client(handler)

        assert client.send_events(_envelopes(sync_event, 1)) is False
        assert calls == 1
        assert fake_logger.messages("ERROR") == [
            f"Event stream rejected batch of 1 events with HTTP {status_code}"
        ]

    def test_one_failed_batch_fails_the_call(
        self, sync_event: SyncEvent, fake_logger: FakeLogger
    ) -> None:
        """Remaining batches are still sent but the result reports failure."""
        responses = iter([400, 200])
        calls = 0

        def handler(_request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(next(responses))

        client = _client(handler, max_batch_size=1)

        assert client.send_events(_envelopes(sync_event, 2)) is False
        assert calls == 2


class TestEventStreamClientResources:
    """Tests for HTTP client ownership."""

    def test_injected_client_is_not_closed(self) -> None:
        """Closing leaves an injected client open."""
        http_client = httpx.Client(
            transport=httpx.MockTransport(lambda _r: httpx.Response(200))
        )
        client = EventStreamClient(
            EventStreamConfig(endpoint=_ENDPOINT), http_client=http_client
        )

        client.close()

        assert not http_client.is_closed

    def test_owned_client_is_closed(self) -> None:
        """Closing releases an owned client."""
        client = EventStreamClient(EventStreamConfig(endpoint=_ENDPOINT))

        client.close()

        assert client._client.is_closed
