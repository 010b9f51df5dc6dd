"""Fire-and-forget recording of sync events on a shared thread pool.

``SyncTelemetryRecorder`` is created once, when the host initialises
telemetry. It resolves the submitter a single time and then hands each
event to a worker thread, so the caller never blocks on the network and
never sees a submission error: outcomes are only logged.

Usage
-----
>>> recorder = SyncTelemetryRecorder.from_config(TelemetryConfig.from_env())
>>> recorder.record_sync_result(SyncFailed(total_duration=420), host)
>>> recorder.close()

"""

from __future__ import annotations

import collections.abc as cabc
import concurrent.futures as cf
import threading
import typing as typ

from synctelemetry.events.builder import build_sync_event
from synctelemetry.logging import get_logger, log_debug, log_warning
from synctelemetry.observability import SubmissionEventLogger
from synctelemetry.submitters.factory import describe_submitter, resolve_submitter

if typ.TYPE_CHECKING:
    import types

    from synctelemetry.config import TelemetryConfig
    from synctelemetry.events.models import HostSnapshot, SyncEvent, SyncResult
    from synctelemetry.submitters.factory import Submitter

logger = get_logger(__name__)

_THREAD_NAME_PREFIX = "sync-telemetry"


class SyncTelemetryRecorder:
    """Dispatch sync events to the configured submitter in the background.

    Parameters
    ----------
    submitter
        Resolved submitter, or ``None`` when telemetry is disabled. The
        recorder takes ownership and closes it in ``close``.
    max_workers
        Number of worker threads running submissions.
    executor
        Optional executor for testing. If not provided, the recorder creates
        and owns a ``ThreadPoolExecutor``.
    event_logger
        Optional structured event logger for testing.

    """

    def __init__(
        self,
        submitter: Submitter | None,
        *,
        max_workers: int = 2,
        executor: cf.Executor | None = None,
        event_logger: SubmissionEventLogger | None = None,
    ) -> None:
        """Initialise the recorder around an already resolved submitter."""
        self._submitter = submitter
        self._owns_executor = executor is None
        self._executor = executor or cf.ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix=_THREAD_NAME_PREFIX,
        )
        self._event_logger = event_logger or SubmissionEventLogger()
        self._backend = (
            describe_submitter(submitter) if submitter is not None else None
        )
        self._lock = threading.Lock()
        self._pending: set[cf.Future[bool]] = set()
        self._closing = False
        self._submitter_closed = False

    @classmethod
    def from_config(cls, config: TelemetryConfig) -> SyncTelemetryRecorder:
        """Resolve the submitter for ``config.endpoint`` and build a recorder.

        A blank or rejected endpoint still yields a recorder; it simply
        logs and skips every event.
        """
        submitter = resolve_submitter(config.endpoint, config=config)
        return cls(submitter, max_workers=config.max_workers)

    @property
    def submitter(self) -> Submitter | None:
        """Read-only access to the resolved submitter."""
        return self._submitter

    @property
    def enabled(self) -> bool:
        """Return whether events will be submitted."""
        return self._submitter is not None

    def record(self, event: SyncEvent) -> None:
        """Submit ``event`` on a worker thread without waiting for it."""
        self._dispatch(lambda: event)

    def record_sync_result(
        self,
        result: SyncResult,
        host: HostSnapshot,
        *,
        active_workspace: str | None = None,
        agp_version: str | None = None,
        sa_toolbox_channel: str | None = None,
        artifact_sync_enabled: bool = False,
    ) -> None:
        """Build the event for ``result`` on a worker thread and submit it.

        Parameters
        ----------
        result
            Outcome of the finished sync.
        host
            Host and IDE facts captured at sync time.
        active_workspace, agp_version, sa_toolbox_channel, artifact_sync_enabled
            Optional event fields passed to ``build_sync_event``.

        """
        self._dispatch(
            lambda: build_sync_event(
                result,
                host,
                active_workspace=active_workspace,
                agp_version=agp_version,
                sa_toolbox_channel=sa_toolbox_channel,
                artifact_sync_enabled=artifact_sync_enabled,
            )
        )

    def close(self, *, wait: bool = True) -> None:
        """Shut down the worker pool, then close the submitter.

        Parameters
        ----------
        wait
            Block until queued submissions have finished. When ``False``,
            queued submissions are cancelled and the submitter is closed
            once the submissions already running have finished.

        """
        if self._owns_executor:
            self._executor.shutdown(wait=wait, cancel_futures=not wait)
        with self._lock:
            self._closing = True
            drained = not self._pending
        if drained:
            self._release_submitter()

    def __enter__(self) -> typ.Self:
        """Return the recorder for use as a context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: types.TracebackType | None,
    ) -> None:
        """Close the recorder, waiting for queued submissions."""
        self.close()

    def _release_submitter(self) -> None:
        with self._lock:
            if self._submitter is None or self._submitter_closed:
                return
            self._submitter_closed = True
        self._submitter.close()

    def _finish(self, future: cf.Future[bool]) -> None:
        with self._lock:
            self._pending.discard(future)
            drained = self._closing and not self._pending
        if drained:
            self._release_submitter()

    def _report(
        self, future: cf.Future[bool], backend: str, sync_type: str | None
    ) -> None:
        if future.cancelled():
            log_warning(
                logger, "Recorder closed before a queued sync event was submitted"
            )
            return
        error = future.exception()
        if error is not None:
            self._event_logger.log_submission_failed(
                backend=backend, sync_type=sync_type, error=error
            )
        elif future.result():
            self._event_logger.log_submission_succeeded(
                backend=backend, sync_type=typ.cast("str", sync_type)
            )
        else:
            self._event_logger.log_submission_failed(
                backend=backend, sync_type=sync_type
            )

    def _dispatch(self, make_event: cabc.Callable[[], SyncEvent]) -> None:
        submitter = self._submitter
        if submitter is None:
            log_warning(logger, "Telemetry is disabled; skipping sync event")
            return

        backend = typ.cast("str", self._backend)
        # Holds the sync type once the event exists so failures can report it.
        context: dict[str, str] = {}

        def task() -> bool:
            event = make_event()
            context["sync_type"] = event.sync_type
            log_debug(
                logger,
                "Recording %s sync event via %s",
                event.sync_type,
                backend,
            )
            return submitter.submit(event)

        def done(future: cf.Future[bool]) -> None:
            try:
                self._report(future, backend, context.get("sync_type"))
            finally:
                self._finish(future)

        future: cf.Future[bool] | None
        # Registered under the lock so a fast task cannot finish unseen.
        with self._lock:
            if self._closing:
                future = None
            else:
                try:
                    future = self._executor.submit(task)
                except RuntimeError:
                    future = None
                else:
                    self._pending.add(future)
        if future is None:
            log_warning(logger, "Recorder is closed; skipping sync event")
            return
        future.add_done_callback(done)
