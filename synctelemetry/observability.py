"""Emit structured observability events for telemetry submission.

This module defines event identifiers and a logger wrapper used by the
submitter factory and ``SyncTelemetryRecorder`` to report backend
resolution and the outcome of each submission.

Usage
-----
>>> event_logger = SubmissionEventLogger()
>>> event_logger.log_submitter_resolved(
...     backend="stream",
...     endpoint="https://eventstream.example.com",
... )

"""

from __future__ import annotations

import enum

from synctelemetry.logging import (
    format_log_message,
    get_logger,
    log_error,
    log_exception,
    log_info,
    log_warning,
)

logger = get_logger(__name__)


class SubmissionEventType(enum.StrEnum):
    """Structured log event types for telemetry submission."""

    SUBMITTER_RESOLVED = "telemetry.submitter.resolved"
    SUBMITTER_DISABLED = "telemetry.submitter.disabled"
    SUBMISSION_SUCCEEDED = "telemetry.submission.succeeded"
    SUBMISSION_FAILED = "telemetry.submission.failed"


class SubmissionEventLogger:
    """Emit structured submission events via femtologging."""

    def log_submitter_resolved(self, *, backend: str, endpoint: str) -> None:
        """Log the backend selected for a configured endpoint.

        Parameters
        ----------
        backend
            Short backend name, ``forms`` or ``stream``.
        endpoint
            Normalized endpoint the submitter targets.

        """
        log_info(
            logger,
            "[%s] backend=%s endpoint=%s",
            SubmissionEventType.SUBMITTER_RESOLVED,
            backend,
            endpoint,
        )

    def log_submitter_disabled(
        self,
        *,
        reason: str,
        endpoint: str | None = None,
        error: BaseException | None = None,
    ) -> None:
        """Log that telemetry is disabled and why.

        A missing endpoint is a WARNING; an endpoint that was configured but
        rejected is an ERROR carrying the exception.

        Parameters
        ----------
        reason
            Machine-readable cause, such as ``no_endpoint`` or a
            ``FormsUrlErrorReason`` value.
        endpoint
            The rejected endpoint, when one was configured.
        error
            Exception raised while building the submitter, if any.

        """
        if error is None:
            log_warning(
                logger,
                "[%s] reason=%s endpoint=%s",
                SubmissionEventType.SUBMITTER_DISABLED,
                reason,
                endpoint,
            )
            return

        message = format_log_message(
            "[%s] reason=%s endpoint=%s error_type=%s error_message=%s",
            SubmissionEventType.SUBMITTER_DISABLED,
            reason,
            endpoint,
            type(error).__name__,
            str(error),
        )
        log_exception(logger, message, error)

    def log_submission_succeeded(self, *, backend: str, sync_type: str) -> None:
        """Log an event accepted by the backend."""
        log_info(
            logger,
            "[%s] backend=%s sync_type=%s",
            SubmissionEventType.SUBMISSION_SUCCEEDED,
            backend,
            sync_type,
        )

    def log_submission_failed(
        self,
        *,
        backend: str,
        sync_type: str | None,
        error: BaseException | None = None,
    ) -> None:
        """Log an event the backend did not accept.

        Parameters
        ----------
        backend
            Short backend name, ``forms`` or ``stream``.
        sync_type
            Outcome of the sync being reported, when the event was built.
        error
            Unexpected exception raised by the submission task. ``None``
            when the submitter reported failure by returning ``False``.

        """
        error_type = type(error).__name__ if error is not None else None
        error_message = str(error) if error is not None else None
        log_error(
            logger,
            "[%s] backend=%s sync_type=%s error_type=%s error_message=%s",
            SubmissionEventType.SUBMISSION_FAILED,
            backend,
            sync_type,
            error_type,
            error_message,
            exc_info=error,
        )
